"""Domain objects describing what gets published."""

from __future__ import annotations

import base64
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List

from .constants import CATALOG_SUFFIX, MODULE_SOURCE_NAME, POM_SOURCE_NAME
from .errors import PreconditionError


@dataclass(frozen=True)
class Coordinate:
    """Represents a Maven group/artifact/version coordinate."""

    group_id: str
    artifact_id: str
    version: str

    @property
    def deployment_name(self) -> str:
        return f"{self.group_id}:{self.artifact_id}:{self.version}"

    @property
    def path_segments(self) -> List[str]:
        return [*self.group_id.split("."), self.artifact_id, self.version]

    def validate(self) -> None:
        missing = [
            name
            for name, value in (
                ("group_id", self.group_id),
                ("artifact_id", self.artifact_id),
                ("version", self.version),
            )
            if not (value or "").strip()
        ]
        if missing:
            raise PreconditionError(f"coordinate is incomplete, missing: {', '.join(missing)}")


class ArtifactRole(str, Enum):
    BINARY = "binary"
    SOURCES = "sources"
    JAVADOC = "javadoc"
    POM = "pom"
    MODULE_METADATA = "module-metadata"
    VERSION_CATALOG = "version-catalog"

    @classmethod
    def from_file_name(cls, name: str) -> "ArtifactRole":
        if name == POM_SOURCE_NAME:
            return cls.POM
        if name == MODULE_SOURCE_NAME:
            return cls.MODULE_METADATA
        if name.endswith(CATALOG_SUFFIX):
            return cls.VERSION_CATALOG
        if name.endswith("-sources.jar"):
            return cls.SOURCES
        if name.endswith("-javadoc.jar"):
            return cls.JAVADOC
        return cls.BINARY


@dataclass(frozen=True)
class Artifact:
    """A single publishable file produced by the build."""

    path: Path
    role: ArtifactRole

    @classmethod
    def from_path(cls, path: Path) -> "Artifact":
        return cls(path=path, role=ArtifactRole.from_file_name(path.name))

    @property
    def name(self) -> str:
        return self.path.name


class ComponentType(str, Enum):
    """The two flavours of publishable unit."""

    LIBRARY = "library"
    VERSION_CATALOG = "version-catalog"

    @classmethod
    def parse(cls, value: str) -> "ComponentType":
        normalized = (value or "").strip().lower().replace("_", "-")
        if normalized == "versioncatalog":
            normalized = cls.VERSION_CATALOG.value
        try:
            return cls(normalized)
        except ValueError:
            raise PreconditionError(f"unknown component type {value!r}") from None

    @property
    def generation_tasks(self) -> List[str]:
        common = [
            "javadocJar",
            "sourcesJar",
            "generatePomFileForMavenPublication",
            "generateMetadataFileForMavenPublication",
        ]
        if self is ComponentType.VERSION_CATALOG:
            return common
        return ["jar", *common]


class PublishingType(str, Enum):
    AUTOMATIC = "AUTOMATIC"
    USER_MANAGED = "USER_MANAGED"

    @classmethod
    def parse(cls, value: str) -> "PublishingType":
        try:
            return cls((value or "").strip().upper())
        except ValueError:
            allowed = ", ".join(item.value for item in cls)
            raise PreconditionError(f"unknown publishing type {value!r} (expected one of {allowed})") from None


@dataclass(frozen=True)
class Credentials:
    """Portal user token; the password is kept out of repr."""

    username: str
    password: str = field(repr=False)

    def validate(self) -> None:
        if not (self.username or "").strip():
            raise PreconditionError("Sonatype username must not be empty")
        if not (self.password or "").strip():
            raise PreconditionError("Sonatype password must not be empty")

    @property
    def authorization_header(self) -> str:
        token = base64.b64encode(f"{self.username}:{self.password}".encode("utf-8")).decode("ascii")
        return f"UserToken {token}"
