"""乱数源の実装"""
from __future__ import annotations

import random
import secrets
from typing import Protocol


class RandomSource(Protocol):
    def token_bytes(self, length: int) -> bytes:
        ...


class SecureRandomSource:
    """OS の暗号論的乱数を使う。本番ではこれ以外を使わないこと"""

    def token_bytes(self, length: int) -> bytes:
        return secrets.token_bytes(length)


class SeededRandomSource:
    """シード固定の再現可能な乱数。テスト専用で秘密の生成には使えない"""

    def __init__(self, seed: int):
        self._random = random.Random(seed)

    def token_bytes(self, length: int) -> bytes:
        return bytes(self._random.getrandbits(8) for _ in range(length))


__all__ = ["RandomSource", "SecureRandomSource", "SeededRandomSource"]
