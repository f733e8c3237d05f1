import unittest

from schemafu.classifier import (
    failure_from_exception,
    format_schema_error,
    format_validation_errors,
    is_validation_failure,
    validation_errors,
)
from schemafu.errors import BundleError, SchemaValidationError, WriteError
from schemafu.results import GenericFailure, SchemaError, ValidationFailure


class TestFailureFromException(unittest.TestCase):
    def test_generic_failure(self):
        error = BundleError("Failed to bundle schema: missing.json")
        failure = failure_from_exception(error)
        self.assertIsInstance(failure, GenericFailure)
        self.assertEqual(failure.message, "Failed to bundle schema: missing.json")
        self.assertIs(failure.exception, error)

    def test_validation_failure(self):
        errors = [SchemaError("/type", "bad type"), SchemaError("", None)]
        failure = failure_from_exception(SchemaValidationError("Schema validation failed", errors))
        self.assertIsInstance(failure, ValidationFailure)
        self.assertEqual(failure.errors, tuple(errors))

    def test_write_error_is_generic(self):
        self.assertIsInstance(failure_from_exception(WriteError("disk full")), GenericFailure)


class TestValidationErrors(unittest.TestCase):
    def test_errors_of_validation_failure(self):
        errors = (SchemaError("/a", "x"),)
        self.assertEqual(validation_errors(ValidationFailure("failed", errors)), errors)

    def test_empty_errors_are_still_a_validation_failure(self):
        failure = ValidationFailure("failed", ())
        self.assertTrue(is_validation_failure(failure))
        self.assertEqual(validation_errors(failure), ())

    def test_generic_failure_has_no_errors(self):
        failure = GenericFailure("failed")
        self.assertFalse(is_validation_failure(failure))
        self.assertIsNone(validation_errors(failure))

    def test_none(self):
        self.assertFalse(is_validation_failure(None))
        self.assertIsNone(validation_errors(None))


class TestFormatValidationErrors(unittest.TestCase):
    def test_no_errors(self):
        self.assertEqual(format_validation_errors(None), "No errors")
        self.assertEqual(format_validation_errors([]), "No errors")

    def test_single_error_line(self):
        self.assertEqual(format_schema_error(SchemaError("/type", "invalid type")), "/type: invalid type")
        self.assertEqual(format_schema_error(SchemaError()), "/: Unknown error")

    def test_root_path(self):
        self.assertEqual(format_validation_errors([SchemaError("", "must be object")]), "/: must be object")

    def test_unknown_message(self):
        self.assertEqual(format_validation_errors([SchemaError("/properties/a")]), "/properties/a: Unknown error")

    def test_one_line_per_error(self):
        errors = [SchemaError("/type", "invalid type"), SchemaError("/required", "must be array")]
        self.assertEqual(
            format_validation_errors(errors),
            "/type: invalid type\n/required: must be array",
        )


if __name__ == "__main__":
    unittest.main()
