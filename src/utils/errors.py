class InvalidKError(ValueError):
    pass


class EmptyTrainingSetError(ValueError):
    pass


class LengthMismatchError(ValueError):
    pass


class EmptyInputError(ValueError):
    pass


class MissingCategoryMeanWarning(UserWarning):
    """A category has no observed values, so its mean (and the imputed value) is undefined."""
