"""Bech32 address codec for account public keys."""

import bech32

from stakesync.exceptions import DecodeError


class Bech32AddressCodec:
    def __init__(self, hrp: str = "erd", length: int = 32) -> None:
        self._hrp = hrp
        self._length = length

    @property
    def hrp(self) -> str:
        return self._hrp

    def encode(self, raw: bytes) -> str:
        if len(raw) != self._length:
            raise DecodeError(f"wrong public key length: expected {self._length}, got {len(raw)}")
        words = bech32.convertbits(raw, 8, 5)
        if words is None:
            raise DecodeError("error converting public key to bech32 words")
        return bech32.bech32_encode(self._hrp, words)

    def decode(self, address: str) -> bytes:
        hrp, data = bech32.bech32_decode(address)
        if hrp != self._hrp or data is None:
            raise DecodeError(f"invalid bech32 address: {address}")
        decoded = bech32.convertbits(data, 5, 8, False)
        if decoded is None or len(decoded) != self._length:
            raise DecodeError(f"invalid bech32 payload: {address}")
        return bytes(decoded)
