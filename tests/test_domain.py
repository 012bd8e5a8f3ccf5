import pytest

from central_publisher.modules.publishing.domain import (
    ComponentType,
    Coordinate,
    Credentials,
    ErrorEnvelope,
    MalformedResponseError,
    PreconditionError,
    PublishingType,
)


def test_coordinate_names_and_paths():
    coordinate = Coordinate("eu.example.tools", "widget", "2.1.0")

    assert coordinate.deployment_name == "eu.example.tools:widget:2.1.0"
    assert coordinate.path_segments == ["eu", "example", "tools", "widget", "2.1.0"]


def test_coordinate_validation_lists_missing_fields():
    with pytest.raises(PreconditionError, match="artifact_id, version"):
        Coordinate("eu.example", " ", "").validate()


def test_publishing_type_is_case_normalized():
    assert PublishingType.parse("automatic") is PublishingType.AUTOMATIC
    assert PublishingType.parse(" User_Managed ") is PublishingType.USER_MANAGED
    with pytest.raises(PreconditionError):
        PublishingType.parse("manual")


def test_component_type_generation_tasks():
    assert ComponentType.parse("library").generation_tasks[0] == "jar"
    catalog = ComponentType.parse("version_catalog")
    assert catalog is ComponentType.VERSION_CATALOG
    assert "jar" not in catalog.generation_tasks
    with pytest.raises(PreconditionError):
        ComponentType.parse("platform")


def test_credentials_hide_password():
    credentials = Credentials("user", "hunter2")

    assert "hunter2" not in repr(credentials)
    assert credentials.authorization_header == "UserToken dXNlcjpodW50ZXIy"


def test_error_envelope_decoding():
    assert ErrorEnvelope.from_body('{"error":{"message":"bad bundle"}}').error.message == "bad bundle"
    assert ErrorEnvelope.from_body("oops").error.message == "Unknown Error: oops"
    assert ErrorEnvelope.from_body('{"message": "flat"}').error.message.startswith("Unknown Error")
    with pytest.raises(MalformedResponseError):
        ErrorEnvelope.parse_strict("")
