"""Terminal helpers: colours, prompts and screen handling."""

from __future__ import annotations

import os
import subprocess
import sys
from dataclasses import dataclass, field
from enum import Enum
from typing import TextIO


class Color(Enum):
    """ANSI colour escape sequences used for status messages."""

    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    RED = "\033[31m"
    DEFAULT = "\033[0m"


def colored(text: str, color: Color) -> str:
    """Wrap text in the given colour and reset the colour afterwards."""
    return f"{color.value}{text}{Color.DEFAULT.value}"


_CLEAR_SEQUENCE = "\033[2J\033[H"


@dataclass
class Console:
    """Line-oriented terminal input and output."""

    stdin: TextIO = field(default_factory=lambda: sys.stdin)
    stdout: TextIO = field(default_factory=lambda: sys.stdout)

    def write(self, text: str) -> None:
        """Write text to the output stream and flush it."""
        self.stdout.write(text)
        self.stdout.flush()

    def _read_raw_line(self) -> str:
        line = self.stdin.readline()
        if line == "":
            raise EOFError("input stream closed")
        return line

    def _read_token(self, prompt: str) -> str:
        self.write(prompt)
        while True:
            tokens = self._read_raw_line().split()
            if tokens:
                return tokens[0]

    def read_char(self, prompt: str = "") -> str:
        """Read the first non-blank character of the next non-empty line."""
        return self._read_token(prompt)[0]

    def read_word(self, prompt: str = "") -> str:
        """Read the first whitespace-delimited word of the next non-empty line."""
        return self._read_token(prompt)

    def read_line(self, prompt: str = "") -> str:
        """Read a whole line without its line ending."""
        self.write(prompt)
        return self._read_raw_line().rstrip("\r\n")

    def read_int(self, prompt: str = "") -> int:
        """Read an integer; raise ValueError if the word is not a number."""
        token = self._read_token(prompt)
        try:
            return int(token)
        except ValueError:
            raise ValueError(f"expected a number, got {token!r}") from None

    def clear_screen(self) -> None:
        """Clear the terminal, or emit a clear sequence if not a terminal."""
        isatty = getattr(self.stdout, "isatty", None)
        if isatty is not None and isatty():
            self.stdout.flush()
            command = ["cmd", "/c", "cls"] if os.name == "nt" else ["clear"]
            subprocess.run(command, check=False)
        else:
            self.write(_CLEAR_SEQUENCE)

    def wait(self) -> None:
        """Ask the user to press Enter and wait for it."""
        self.write("Press Enter to continue...")
        self.stdin.readline()