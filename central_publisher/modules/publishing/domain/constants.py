"""Constants shared across the publishing domain."""

SIGNATURE_EXTENSION = "asc"

BUNDLE_PART_NAME = "bundle"
BUNDLE_FILE_NAME = "upload.zip"
BUNDLE_CONTENT_TYPE = "application/zip"

POM_SOURCE_NAME = "pom-default.xml"
MODULE_SOURCE_NAME = "module.json"
CATALOG_SUFFIX = "versions.toml"

POM_EXTENSION = "pom"
MODULE_EXTENSION = "module"
CATALOG_EXTENSION = "toml"

UNKNOWN_ERROR_PREFIX = "Unknown Error"
