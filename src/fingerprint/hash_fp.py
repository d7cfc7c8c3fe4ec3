"""
Whole-document digest fingerprint. The raw loaded text is hashed as-is (no
sanitizing), so any change at all yields a different fingerprint.
"""
from __future__ import annotations
import hashlib
import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Mapping, Optional, Union

from fingerprint.base import Fingerprint
from fingerprint.config import load_config
from fingerprint.errors import MissingConfiguration, UnsupportedAlgorithm

logger = logging.getLogger(__name__)


class HashAlgorithm(str, Enum):
    MD5 = "md5"
    SHA1 = "sha1"
    SHA256 = "sha256"

    @classmethod
    def coerce(cls, value) -> "HashAlgorithm":
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.lower())
            except ValueError:
                pass
        raise UnsupportedAlgorithm(f"Unsupported hashing algorithm: {value!r}")


@dataclass
class HashConfig:
    algorithm: Optional[Union[HashAlgorithm, str]] = HashAlgorithm.SHA256

    def validate(self) -> HashAlgorithm:
        if self.algorithm is None:
            raise MissingConfiguration("Hashing algorithm must be specified")
        return HashAlgorithm.coerce(self.algorithm)

    def merged(self, overrides: Union["HashConfig", Mapping, None]) -> "HashConfig":
        if overrides is None:
            return self
        if isinstance(overrides, HashConfig):
            return overrides
        return replace(self, **dict(overrides))

    @classmethod
    def load(cls, yaml_path: Optional[str] = None, env_prefix: str = "HASHFP_", **overrides) -> 'HashConfig':
        return load_config(cls, yaml_path, env_prefix, **overrides)


def digest(text: str, algorithm: HashAlgorithm) -> str:
    # lone surrogates are hashed as their raw UTF-8 bytes
    return hashlib.new(algorithm.value, text.encode("utf-8", errors="surrogatepass")).hexdigest()


class HashFingerprint(Fingerprint):
    def __init__(self, config: Optional[HashConfig] = None):
        super().__init__()
        self.config = config or HashConfig()
        self.config.validate()

    def generate(self, config: Union[HashConfig, Mapping, None] = None) -> str:
        algorithm = self.config.merged(config).validate()
        doc = self._require_document()
        logger.debug("digesting %d chars with %s", len(doc.raw), algorithm.name)
        return digest(doc.raw, algorithm)

    def verify(self, candidate: str, config: Union[HashConfig, Mapping, None] = None) -> bool:
        self.config.merged(config).validate()
        self._require_document()
        self._require_candidate(candidate)
        return self.generate(config) == candidate
