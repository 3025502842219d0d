# Author      : Tyson Limato
# Date        : 2025-7-4
# File Name   : vector_io.py
#
# Input and output of whole vectors. Everything in here runs on the
# coordinator only; read failures come back as None so the caller can turn
# them into a collective check instead of leaving the other ranks waiting.
import sys

import numpy as np
import pandas as pd


class ConsoleSource:
    """
    Reads n and then the vectors as whitespace separated text.

    Parameters:
    -----------
    stream : file-like
        Where the tokens come from (default: sys.stdin).
    out : file-like
        Where prompts are written (default: sys.stdout).
    prompt : bool
        Print "What's the order of the vectors?" / "Enter the vector x".
    """

    def __init__(self, stream=None, out=None, prompt=True):
        self.stream = stream if stream is not None else sys.stdin
        self.out = out if out is not None else sys.stdout
        self.prompt = prompt
        self._tokens = self._iter_tokens()

    def _iter_tokens(self):
        for line in self.stream:
            yield from line.split()

    def _say(self, text: str):
        if self.prompt:
            self.out.write(text + "\n")
            self.out.flush()

    def read_n(self):
        self._say("What's the order of the vectors?")
        token = next(self._tokens, None)
        if token is None:
            return None
        try:
            return int(token)
        except ValueError:
            return None

    def read_vector(self, name: str, n: int):
        self._say(f"Enter the vector {name}")
        try:
            values = np.empty(n, dtype=np.float64)
        except (MemoryError, ValueError):
            # too big for this host or past numpy's maximum dimension
            return None
        for i in range(n):
            token = next(self._tokens, None)
            if token is None:
                return None
            try:
                values[i] = float(token)
            except ValueError:
                return None
        return values


class CsvSource:
    """
    Reads both vectors from a CSV file with one column per vector.

    The order n is the number of rows; each named vector is the column with
    that header (e.g. "x" and "y").
    """

    def __init__(self, csv_path: str):
        self.csv_path = csv_path
        self.df = None
        self.error = None

    def read_n(self):
        try:
            self.df = pd.read_csv(self.csv_path)
        except (OSError, ValueError) as exc:
            # ParserError and EmptyDataError are ValueErrors
            self.error = exc
            return None
        return len(self.df)

    def read_vector(self, name: str, n: int):
        if self.df is None or name not in self.df.columns:
            return None
        try:
            column = pd.to_numeric(self.df[name], errors="coerce")
            if len(column) != n or column.isna().any():
                return None
            return column.to_numpy(dtype=np.float64)
        except MemoryError:
            return None


def format_vector(values, title: str) -> str:
    """Render a vector as "<title>\\n<v0> <v1> ... \\n" with %f formatting."""
    body = "".join(f"{v:f} " for v in values)
    return f"{title}\n{body}\n"


def print_vector(values, title: str, out=None):
    out = out if out is not None else sys.stdout
    out.write(format_vector(values, title))
    out.flush()
