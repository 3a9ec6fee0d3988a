import re

import numpy as np

INT_TOKEN = re.compile(r"-?[0-9]+")
INT64_MIN = int(np.iinfo(np.int64).min)
INT64_MAX = int(np.iinfo(np.int64).max)


class TokenStream:
    """Sequential reader over whitespace separated decimal integers.

    ``error_cls`` is the exception raised when the stream cannot satisfy a
    read, so the instance and solution loaders report their own error kind.
    """

    def __init__(self, text, error_cls, source="<text>"):
        self.tokens = text.split()
        self.position = 0
        self.error_cls = error_cls
        self.source = source

    @property
    def remaining(self):
        return len(self.tokens) - self.position

    def take_ints(self, count, what):
        if self.remaining < count:
            raise self.error_cls(
                f"{self.source}: unexpected end of data while reading {what} "
                f"(expected {count} values, {self.remaining} left)")
        chunk = self.tokens[self.position:self.position + count]
        values = []
        for offset, token in enumerate(chunk):
            where = f"{self.source}: token {self.position + offset + 1} ('{token}') in {what}"
            if not INT_TOKEN.fullmatch(token):
                raise self.error_cls(f"{where} is not an integer")
            value = int(token)
            if not INT64_MIN <= value <= INT64_MAX:
                raise self.error_cls(f"{where} is out of range")
            values.append(value)
        self.position += count
        return np.array(values, dtype=np.int64)

    def take_int(self, what):
        return int(self.take_ints(1, what)[0])

    def take_bools(self, count, what):
        values = self.take_ints(count, what)
        if values.size and not np.isin(values, (0, 1)).all():
            bad = int(values[~np.isin(values, (0, 1))][0])
            raise self.error_cls(f"{self.source}: {what} must be 0 or 1, got {bad}")
        return values.astype(bool)
