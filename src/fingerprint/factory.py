from __future__ import annotations
from typing import Mapping, Union

from fingerprint.base import Fingerprint
from fingerprint.hash_fp import HashConfig, HashFingerprint
from fingerprint.winnowing_fp import WinnowConfig, WinnowFingerprint


def for_config(config: Union[HashConfig, WinnowConfig, Mapping, None] = None) -> Fingerprint:
    """
    Pick the strategy from the shape of `config`: anything carrying an
    algorithm is a digest, everything else (including None) is winnowing.
    """
    if isinstance(config, HashConfig):
        return HashFingerprint(config)
    if isinstance(config, WinnowConfig):
        return WinnowFingerprint(config)
    if config is None:
        return WinnowFingerprint()
    if "algorithm" in config:
        return HashFingerprint(HashConfig(**config))
    return WinnowFingerprint(WinnowConfig(**config))
