from exam_portal.core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DuplicateResourceError,
    InternalFailureError,
    InvalidCredentialsError,
    InvalidTokenError,
    MaterialNotFoundError,
    PayloadTooLargeError,
    UserNotFoundError,
    ValidationError,
    error_response,
)


class TestStatusCodes:

    def test_client_errors(self):
        assert ValidationError("bad").status_code == 400
        assert DuplicateResourceError("dup").status_code == 400
        assert InvalidCredentialsError().status_code == 400
        assert AuthenticationError("no").status_code == 401
        assert InvalidTokenError().status_code == 401
        assert AuthorizationError("no").status_code == 403
        assert MaterialNotFoundError("m-1").status_code == 404
        assert PayloadTooLargeError(1024).status_code == 413

    def test_internal_failure(self):
        error = InternalFailureError()

        assert error.status_code == 500
        assert error.message == "Something went wrong. Please try again."


class TestErrorResponse:

    def test_not_found_body(self):
        body = error_response(UserNotFoundError("u-1"))

        assert body["detail"] == "User not found"
        assert body["code"] == "USER_NOT_FOUND"

    def test_details_omitted_when_empty(self):
        assert error_response(InvalidTokenError()) == {"detail": "Invalid token.", "code": "INVALID_TOKEN"}

    def test_to_dict(self):
        error = ValidationError("No file uploaded", field="file")

        assert error.to_dict() == {
            "code": "VALIDATION_ERROR",
            "message": "No file uploaded",
            "details": {"field": "file"},
        }
