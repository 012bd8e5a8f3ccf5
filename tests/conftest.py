from __future__ import annotations

from pathlib import Path

import pytest

from central_publisher.settings import Settings


@pytest.fixture
def build_settings(tmp_path):
    def _build(**overrides) -> Settings:
        defaults = {
            "group_id": "com.example",
            "artifact_id": "demo",
            "version": "1.0.0",
            "username": "token-user",
            "password": "token-pass",
            "base_url": "https://central.example.test/api/v1/publisher",
            "build_dir": str(tmp_path / "build"),
            "digest_algorithms": ["md5", "sha1", "sha256", "sha512"],
            "http_log_headers": False,
        }
        defaults.update(overrides)
        return Settings(_env_file=None, **defaults)

    return _build


@pytest.fixture
def gradle_build(tmp_path) -> Path:
    """A build directory shaped like Gradle's maven-publish output."""
    build = tmp_path / "build"
    libs = build / "libs"
    pom = build / "publications" / "maven"
    libs.mkdir(parents=True)
    pom.mkdir(parents=True)
    (libs / "demo-1.0.0.jar").write_bytes(b"binary")
    (libs / "demo-1.0.0-sources.jar").write_bytes(b"sources")
    (libs / "demo-1.0.0-javadoc.jar").write_bytes(b"javadoc")
    (libs / "demo-1.0.0-plain.jar").write_bytes(b"plain")
    (pom / "pom-default.xml").write_text("<project/>")
    (pom / "module.json").write_text("{}")
    return build


class FakeSigner:
    def __init__(self) -> None:
        self.signed = []

    def sign(self, path: Path) -> Path:
        self.signed.append(path.name)
        target = path.with_name(path.name + ".asc")
        target.write_text(f"signature of {path.name}")
        return target


class RecordingGenerator:
    def __init__(self) -> None:
        self.calls = []

    def generate(self, tasks) -> None:
        self.calls.append(list(tasks))


@pytest.fixture
def fake_signer() -> FakeSigner:
    return FakeSigner()


@pytest.fixture
def recording_generator() -> RecordingGenerator:
    return RecordingGenerator()
