import hashlib

import pytest
from fingerprint.errors import EmptyDocument, MissingCandidate, MissingConfiguration, UnsupportedAlgorithm
from fingerprint.hash_fp import HashAlgorithm, HashConfig, HashFingerprint

HELLO_SHA256 = "2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824"


def test_sha256_hello_and_verify():
    gen = HashFingerprint(HashConfig(algorithm=HashAlgorithm.SHA256)).from_text("hello")
    assert gen.generate() == HELLO_SHA256
    assert gen.verify(HELLO_SHA256)
    assert not gen.verify("wrong")


@pytest.mark.parametrize("algorithm,expected", [
    (HashAlgorithm.MD5, "5d41402abc4b2a76b9719d911017c592"),
    (HashAlgorithm.SHA1, "aaf4c61ddcc5e8a2dabede0f3b482cd9aea9434d"),
    ("SHA256", HELLO_SHA256),
    ("md5", "5d41402abc4b2a76b9719d911017c592"),
])
def test_algorithms(algorithm, expected):
    gen = HashFingerprint().from_text("hello")
    assert gen.generate({"algorithm": algorithm}) == expected


def test_raw_text_is_not_sanitized():
    a = HashFingerprint().from_text("Hello, world").generate()
    b = HashFingerprint().from_text("helloworld").generate()
    assert a != b


def test_from_file_keeps_line_endings(tmp_path):
    path = tmp_path / "doc.txt"
    path.write_bytes(b"hello\r\nworld\r\n")
    gen = HashFingerprint().from_file(str(path))
    assert gen.generate() == hashlib.sha256(b"hello\r\nworld\r\n").hexdigest()


def test_unsupported_algorithm():
    with pytest.raises(UnsupportedAlgorithm):
        HashFingerprint(HashConfig(algorithm="crc32"))
    gen = HashFingerprint().from_text("hello")
    with pytest.raises(UnsupportedAlgorithm):
        gen.generate({"algorithm": "blake2b"})


def test_missing_algorithm():
    with pytest.raises(MissingConfiguration):
        HashFingerprint(HashConfig(algorithm=None))


def test_no_document():
    with pytest.raises(EmptyDocument):
        HashFingerprint().generate()
    with pytest.raises(EmptyDocument):
        HashFingerprint().from_text("").verify(HELLO_SHA256)


def test_empty_candidate():
    with pytest.raises(MissingCandidate):
        HashFingerprint().from_text("hello").verify("")


def test_lone_surrogate_is_hashed():
    text = "abc" + chr(0xD800)
    gen = HashFingerprint(HashConfig(algorithm="md5")).from_text(text)
    assert gen.generate() == hashlib.md5(text.encode("utf-8", errors="surrogatepass")).hexdigest()
