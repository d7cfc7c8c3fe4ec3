"""
Winnowing over character k-grams of sanitized text.

Each k-gram is reduced with an additive hash (sum of code points mod 500),
then a window of `window_size` consecutive hashes slides one step at a time
and selects its minimum. On ties the rightmost hash wins, and consecutive
windows that pick the same position collapse into a single entry. Any shared
substring of at least threshold + window_size - 1 characters yields a shared
anchor.

The additive hash and the serialized layout are fixed so fingerprints stay
byte-compatible with ones already stored.
"""
from __future__ import annotations
import json
import logging
from collections import deque
from dataclasses import dataclass, replace
from typing import List, Mapping, Optional, Tuple, Union

from fingerprint.base import Fingerprint
from fingerprint.config import load_config
from fingerprint.errors import (
    DocumentTooShort,
    EmptyDocument,
    InvalidThresholds,
    MissingConfiguration,
)

logger = logging.getLogger(__name__)

MAX_HASH_VALUE = 500

Entry = Tuple[int, int]  # (hash, position)


@dataclass
class WinnowConfig:
    threshold: Optional[int] = 10        # k-gram length, also the guarantee threshold
    noise_threshold: Optional[int] = 5   # matches shorter than this are ignored

    @property
    def window_size(self) -> int:
        return self.threshold - self.noise_threshold + 1

    def validate(self):
        for name in ("threshold", "noise_threshold"):
            if getattr(self, name) is None:
                raise MissingConfiguration(f"Missing property: {name}")
        if self.threshold <= 0 or self.noise_threshold <= 0:
            raise InvalidThresholds("threshold and noise_threshold must be positive")
        if self.noise_threshold > self.threshold:
            raise InvalidThresholds("Noise threshold cannot be greater than the threshold")

    def merged(self, overrides: Union["WinnowConfig", Mapping, None]) -> "WinnowConfig":
        if overrides is None:
            return self
        if isinstance(overrides, WinnowConfig):
            return overrides
        return replace(self, **dict(overrides))

    @classmethod
    def load(cls, yaml_path: Optional[str] = None, env_prefix: str = "WINNOW_", **overrides) -> 'WinnowConfig':
        return load_config(cls, yaml_path, env_prefix,
                           converters={"threshold": int, "noise_threshold": int},
                           **overrides)


def kgrams(text: str, threshold: int) -> List[str]:
    n = len(text)
    if n < threshold:
        raise DocumentTooShort(f"String length {n} is smaller than the threshold {threshold}")
    return [text[i:i + threshold] for i in range(n - threshold + 1)]


def kgram_hash(kgram: str) -> int:
    return sum(ord(c) for c in kgram) % MAX_HASH_VALUE


def kgram_hashes(grams: List[str]) -> List[int]:
    return [kgram_hash(g) for g in grams]


def window_minima(hashes: List[int], window_size: int) -> List[Entry]:
    """
    One (min_hash, absolute_position) per window, in window order. On ties the
    rightmost occurrence is selected.
    """
    n = len(hashes)
    w = window_size
    if n < w:
        raise DocumentTooShort(f"{n} k-gram hashes is fewer than the window size {w}")

    # indices with strictly increasing hashes; the front is the window minimum.
    # Popping on >= drops earlier equal values, so ties resolve to the right.
    dq = deque()
    picks: List[Entry] = []

    for i, hv in enumerate(hashes):
        while dq and hashes[dq[-1]] >= hv:
            dq.pop()
        dq.append(i)

        while dq[0] <= i - w:
            dq.popleft()

        if i >= w - 1:
            picks.append((hashes[dq[0]], dq[0]))

    return picks


def assemble(selections: List[Entry]) -> List[Entry]:
    """Drop selections whose position repeats the previous emitted entry."""
    entries: List[Entry] = []
    for min_hash, pos in selections:
        if not entries or entries[-1][1] != pos:
            entries.append((min_hash, pos))
    return entries


def winnow(text: str, cfg: WinnowConfig) -> List[Entry]:
    """
    Full pipeline over already sanitized text: k-grams, hashes, window
    minima, dedup.
    """
    cfg.validate()
    if not text:
        raise EmptyDocument("Sanitized document is empty")
    if len(text) < cfg.window_size:
        raise DocumentTooShort(f"String length {len(text)} is smaller than the window size {cfg.window_size}")

    grams = kgrams(text, cfg.threshold)
    hashes = kgram_hashes(grams)
    selections = window_minima(hashes, cfg.window_size)
    entries = assemble(selections)
    logger.debug("winnow: chars=%d kgrams=%d windows=%d entries=%d",
                 len(text), len(grams), len(selections), len(entries))
    return entries


def dumps_fingerprint(entries: List[Entry]) -> str:
    return json.dumps([[h, p] for h, p in entries], separators=(",", ":"))


def loads_fingerprint(serialized: str) -> List[Entry]:
    data = json.loads(serialized)
    if not isinstance(data, list):
        raise ValueError("Fingerprint must be a JSON array of [hash, position] pairs")
    entries = []
    for pair in data:
        if (not isinstance(pair, list) or len(pair) != 2
                or not all(isinstance(x, int) and not isinstance(x, bool) for x in pair)):
            raise ValueError(f"Malformed fingerprint entry: {pair!r}")
        if not 0 <= pair[0] < MAX_HASH_VALUE or pair[1] < 0:
            raise ValueError(f"Fingerprint entry out of range: {pair!r}")
        entries.append((pair[0], pair[1]))
    return entries


class WinnowFingerprint(Fingerprint):
    def __init__(self, config: Optional[WinnowConfig] = None):
        super().__init__()
        self.config = config or WinnowConfig()
        self.config.validate()

    def fingerprint(self, config: Union[WinnowConfig, Mapping, None] = None) -> List[Entry]:
        cfg = self.config.merged(config)
        cfg.validate()
        doc = self._require_document()
        return winnow(doc.sanitized, cfg)

    def generate(self, config: Union[WinnowConfig, Mapping, None] = None) -> str:
        return dumps_fingerprint(self.fingerprint(config))

    def verify(self, candidate: str, config: Union[WinnowConfig, Mapping, None] = None) -> bool:
        self.config.merged(config).validate()
        self._require_document()
        self._require_candidate(candidate)
        return self.generate(config) == candidate
