import hashlib
from pathlib import Path

import pytest

from central_publisher.modules.publishing.bundle import compute_directory_hashes, verify_directory_hashes
from central_publisher.modules.publishing.bundle.hashing import normalize_algorithms
from central_publisher.modules.publishing.domain import FilesystemError, PreconditionError


def test_hashes_every_file_and_signature(tmp_path):
    (tmp_path / "a.jar").write_bytes(b"jar-bytes")
    (tmp_path / "a.jar.asc").write_text("-----BEGIN PGP SIGNATURE-----")

    written = compute_directory_hashes(tmp_path, ["sha256"])

    assert {p.name for p in tmp_path.iterdir()} == {"a.jar", "a.jar.asc", "a.jar.sha256", "a.jar.asc.sha256"}
    assert [p.name for p in written] == ["a.jar.asc.sha256", "a.jar.sha256"]
    assert (tmp_path / "a.jar.sha256").read_text() == hashlib.sha256(b"jar-bytes").hexdigest()


def test_digest_content_is_lowercase_hex_without_newline(tmp_path):
    payload = b"\x00\x01binary\n"
    (tmp_path / "lib.pom").write_bytes(payload)

    compute_directory_hashes(tmp_path, ["MD5", "sha1", "SHA-512"])

    assert (tmp_path / "lib.pom.md5").read_bytes() == hashlib.md5(payload).hexdigest().encode("ascii")
    assert (tmp_path / "lib.pom.sha1").read_text() == hashlib.sha1(payload).hexdigest()
    sha512 = (tmp_path / "lib.pom.sha512").read_text()
    assert sha512 == sha512.lower()
    assert not sha512.endswith("\n")


def test_existing_digest_files_are_not_hashed_again(tmp_path):
    (tmp_path / "a.jar").write_bytes(b"x")
    (tmp_path / "a.jar.md5").write_text("stale")

    compute_directory_hashes(tmp_path, ["sha1"])
    compute_directory_hashes(tmp_path, ["sha1"])

    names = {p.name for p in tmp_path.iterdir()}
    assert names == {"a.jar", "a.jar.md5", "a.jar.sha1"}


def test_nested_directories_are_walked(tmp_path):
    nested = tmp_path / "com" / "example" / "lib" / "1.0"
    nested.mkdir(parents=True)
    (nested / "lib-1.0.jar").write_bytes(b"nested")

    compute_directory_hashes(tmp_path, ["sha256"])

    assert (nested / "lib-1.0.jar.sha256").read_text() == hashlib.sha256(b"nested").hexdigest()


def test_unknown_algorithm_fails_before_writing(tmp_path):
    (tmp_path / "a.jar").write_bytes(b"x")

    with pytest.raises(PreconditionError):
        compute_directory_hashes(tmp_path, ["sha256", "crc32"])

    assert [p.name for p in tmp_path.iterdir()] == ["a.jar"]


def test_normalize_algorithms_deduplicates_in_order():
    assert normalize_algorithms(["SHA-256", "md5", "sha256"]) == ["sha256", "md5"]
    with pytest.raises(PreconditionError):
        normalize_algorithms([])


def test_missing_directory_is_a_filesystem_error(tmp_path):
    with pytest.raises(FilesystemError):
        compute_directory_hashes(tmp_path / "absent", ["md5"])


def test_unreadable_file_aborts_and_leaves_no_sidecars(tmp_path, monkeypatch):
    from central_publisher.modules.publishing.bundle import hashing

    (tmp_path / "good.jar").write_bytes(b"good")
    (tmp_path / "bad.jar").write_bytes(b"bad")
    real_digest = hashing.file_digest

    def flaky_digest(path, algorithm):
        if path.name == "bad.jar":
            raise PermissionError("denied")
        return real_digest(path, algorithm)

    monkeypatch.setattr(hashing, "file_digest", flaky_digest)

    with pytest.raises(FilesystemError, match="bad.jar"):
        compute_directory_hashes(tmp_path, ["sha256"], max_workers=1)

    assert {p.name for p in tmp_path.iterdir()} == {"good.jar", "bad.jar"}


def test_verify_reports_stale_and_missing_digests(tmp_path):
    (tmp_path / "a.jar").write_bytes(b"one")
    (tmp_path / "b.jar").write_bytes(b"two")
    compute_directory_hashes(tmp_path, ["sha256"])
    assert verify_directory_hashes(tmp_path, ["sha256"]) == []

    (tmp_path / "a.jar").write_bytes(b"changed")
    (tmp_path / "b.jar.sha256").unlink()

    mismatched = verify_directory_hashes(tmp_path, ["sha256"])
    assert [p.name for p in mismatched] == ["a.jar.sha256", "b.jar.sha256"]


def test_failed_sidecar_write_removes_partial_sidecars(tmp_path, monkeypatch):
    (tmp_path / "a.jar").write_bytes(b"jar")
    real_write_text = Path.write_text

    def failing_write_text(self, *args, **kwargs):
        if self.name.endswith(".sha1"):
            raise OSError("disk full")
        return real_write_text(self, *args, **kwargs)

    monkeypatch.setattr(Path, "write_text", failing_write_text)

    with pytest.raises(FilesystemError, match="a.jar.sha1"):
        compute_directory_hashes(tmp_path, ["md5", "sha1"], max_workers=1)

    assert [p.name for p in tmp_path.iterdir()] == ["a.jar"]


def test_verify_wraps_read_errors(tmp_path, monkeypatch):
    from central_publisher.modules.publishing.bundle import hashing

    (tmp_path / "a.jar").write_bytes(b"one")
    compute_directory_hashes(tmp_path, ["sha256"])

    def unreadable(path, algorithm):
        raise PermissionError("denied")

    monkeypatch.setattr(hashing, "file_digest", unreadable)

    with pytest.raises(FilesystemError, match="a.jar.sha256"):
        verify_directory_hashes(tmp_path, ["sha256"])
