"""Unit tests for application exceptions."""

from adbcli.core.exceptions import (
    ApiError,
    ApplicationError,
    ConfigurationError,
    ExternalServiceError,
    ValidationError,
)


class TestExceptions:

    def test_codes(self):
        assert ValidationError().code == "VAL_VALIDATION_ERROR"
        assert ConfigurationError().code == "SYS_CONFIGURATION_ERROR"
        assert ExternalServiceError().code == "SYS_EXTERNAL_SERVICE_ERROR"

    def test_hierarchy(self):
        error = ApiError(500, "boom")
        assert isinstance(error, ExternalServiceError)
        assert isinstance(error, ApplicationError)

    def test_api_error_keeps_response_details(self):
        body = {"error_code": "RESOURCE_DOES_NOT_EXIST", "message": "gone"}
        error = ApiError(404, "gone", error_code="RESOURCE_DOES_NOT_EXIST", body=body)

        assert error.status_code == 404
        assert error.code == "RESOURCE_DOES_NOT_EXIST"
        assert error.body == body
        assert str(error) == "404 RESOURCE_DOES_NOT_EXIST: gone"

    def test_api_error_without_error_code(self):
        assert str(ApiError(502, "Bad Gateway")) == "502: Bad Gateway"

    def test_validation_details(self):
        error = ValidationError("bad", details={"flag": "--auto-scale"})
        assert error.details == {"flag": "--auto-scale"}
        assert error.message == "bad"
