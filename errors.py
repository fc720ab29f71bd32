class ModelError(Exception):
    """Base class for failures of the train/predict pipeline.

    ``status_code`` is the HTTP status the service answers with.
    """

    status_code = 500


class SchemaError(ModelError):
    """A required column is missing from the training data."""


class DataError(ModelError):
    """Not enough usable rows to train on."""


class NotTrainedError(ModelError):
    """Prediction was asked for before any model was saved."""

    status_code = 400


class CorruptModelError(ModelError):
    """Stored artifacts exist but cannot be read back."""


class InvalidInputError(ModelError):
    """A predict record is missing a feature or holds a non-numeric value."""

    status_code = 400
