"""LZO1X block decompression with bounds checking."""

from __future__ import annotations

import enum

from silica.errors import LzoError

_M2_MAX_OFFSET = 0x0800
_M4_BASE_OFFSET = 0x4000


class _State(enum.Enum):
    LITERAL = enum.auto()
    FIRST_LITERAL = enum.auto()
    MATCH = enum.auto()
    MATCH_DONE = enum.auto()
    MATCH_NEXT = enum.auto()


class _Decoder:
    def __init__(self, src: bytes, limit: int) -> None:
        self.src = src
        self.pos = 0
        self.out = bytearray()
        self.limit = limit

    def byte(self) -> int:
        if self.pos >= len(self.src):
            raise LzoError("input overrun")
        value = self.src[self.pos]
        self.pos += 1
        return value

    def extended(self, base: int) -> int:
        count = 0
        while True:
            value = self.byte()
            if value:
                return count + base + value
            count += 255

    def literals(self, count: int) -> None:
        end = self.pos + count
        if end > len(self.src):
            raise LzoError("input overrun")
        if len(self.out) + count > self.limit:
            raise LzoError("output overrun")
        self.out += self.src[self.pos:end]
        self.pos = end

    def copy_match(self, distance: int, length: int) -> None:
        start = len(self.out) - distance
        if start < 0:
            raise LzoError("lookbehind overrun")
        if len(self.out) + length > self.limit:
            raise LzoError("output overrun")
        if distance >= length:
            self.out += self.out[start:start + length]
        else:
            for offset in range(length):
                self.out.append(self.out[start + offset])

    def run(self) -> bytes:
        t = 0
        state = _State.LITERAL
        if self.src and self.src[0] > 17:
            t = self.src[0] - 17
            self.pos = 1
            if t < 4:
                state = _State.MATCH_NEXT
            else:
                self.literals(t)
                state = _State.FIRST_LITERAL

        while True:
            if state is _State.LITERAL:
                t = self.byte()
                if t >= 16:
                    state = _State.MATCH
                    continue
                if t == 0:
                    t = self.extended(15)
                self.literals(t + 3)
                state = _State.FIRST_LITERAL
            elif state is _State.FIRST_LITERAL:
                t = self.byte()
                if t >= 16:
                    state = _State.MATCH
                    continue
                distance = 1 + _M2_MAX_OFFSET + (t >> 2) + (self.byte() << 2)
                self.copy_match(distance, 3)
                state = _State.MATCH_DONE
            elif state is _State.MATCH:
                if t >= 64:
                    distance = 1 + ((t >> 2) & 7) + (self.byte() << 3)
                    length = (t >> 5) + 1
                elif t >= 32:
                    t &= 31
                    if t == 0:
                        t = self.extended(31)
                    low, high = self.byte(), self.byte()
                    distance = 1 + (low >> 2) + (high << 6)
                    length = t + 2
                elif t >= 16:
                    far = (t & 8) << 11
                    t &= 7
                    if t == 0:
                        t = self.extended(7)
                    low, high = self.byte(), self.byte()
                    distance = far + (low >> 2) + (high << 6)
                    if distance == 0:
                        return self.finish()
                    distance += _M4_BASE_OFFSET
                    length = t + 2
                else:
                    distance = 1 + (t >> 2) + (self.byte() << 2)
                    length = 2
                self.copy_match(distance, length)
                state = _State.MATCH_DONE
            elif state is _State.MATCH_DONE:
                t = self.src[self.pos - 2] & 3
                state = _State.LITERAL if t == 0 else _State.MATCH_NEXT
            else:
                self.literals(t)
                t = self.byte()
                state = _State.MATCH

    def finish(self) -> bytes:
        if self.pos < len(self.src):
            raise LzoError("input not consumed")
        return bytes(self.out)


def decompress(data: bytes, output_length: int) -> bytes:
    """Decompress an LZO1X block into at most ``output_length`` bytes."""
    return _Decoder(bytes(data), output_length).run()