import zipfile

import pytest

from central_publisher.modules.publishing.bundle import build_archive, compute_directory_hashes
from central_publisher.modules.publishing.domain import FilesystemError


def _populate(root):
    files = {
        "com/example/demo/1.0/demo-1.0.jar": b"jar",
        "com/example/demo/1.0/demo-1.0.jar.asc": b"sig",
        "com/example/demo/1.0/demo-1.0.pom": b"<project/>",
    }
    for rel, data in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
    return files


def test_archive_preserves_relative_paths_and_bytes(tmp_path):
    source = tmp_path / "upload"
    files = _populate(source)
    destination = tmp_path / "upload.zip"

    members = build_archive(source, destination)

    assert members == sorted(files)
    with zipfile.ZipFile(destination) as zf:
        assert sorted(zf.namelist()) == sorted(files)
        for name, data in files.items():
            assert zf.read(name) == data


def test_extracting_reproduces_the_source_tree(tmp_path):
    source = tmp_path / "upload"
    _populate(source)
    destination = tmp_path / "upload.zip"
    build_archive(source, destination)

    extracted = tmp_path / "extracted"
    with zipfile.ZipFile(destination) as zf:
        zf.extractall(extracted)

    def tree(root):
        return {p.relative_to(root).as_posix(): p.read_bytes() for p in root.rglob("*") if p.is_file()}

    assert tree(extracted) == tree(source)


def test_existing_archive_is_overwritten(tmp_path):
    source = tmp_path / "upload"
    source.mkdir()
    (source / "only.txt").write_text("fresh")
    destination = tmp_path / "upload.zip"
    destination.write_bytes(b"not a zip")

    build_archive(source, destination)

    with zipfile.ZipFile(destination) as zf:
        assert zf.namelist() == ["only.txt"]
    assert not (tmp_path / "upload.zip.tmp").exists()


def test_destination_inside_source_is_not_archived(tmp_path):
    (tmp_path / "a.jar").write_bytes(b"a")
    destination = tmp_path / "bundle.zip"
    build_archive(tmp_path, destination)

    members = build_archive(tmp_path, destination)

    assert members == ["a.jar"]


def test_missing_source_directory(tmp_path):
    with pytest.raises(FilesystemError):
        build_archive(tmp_path / "absent", tmp_path / "upload.zip")


def test_hash_then_archive_contains_exactly_four_entries(tmp_path):
    staging = tmp_path / "staging"
    staging.mkdir()
    (staging / "a.jar").write_bytes(b"jar")
    (staging / "a.jar.asc").write_bytes(b"sig")

    compute_directory_hashes(staging, ["sha256"])
    build_archive(staging, tmp_path / "upload.zip")

    with zipfile.ZipFile(tmp_path / "upload.zip") as zf:
        assert sorted(zf.namelist()) == ["a.jar", "a.jar.asc", "a.jar.asc.sha256", "a.jar.sha256"]
