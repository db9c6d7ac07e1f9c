# statlearn/utils/errors.py
class UserInputError(RuntimeError):
    """
    Raised for invalid user-provided input (config, files, parameters).
    Should NOT print traceback.
    """


class DataValidationError(UserInputError):
    """
    Input table / matrix content is unusable.
    The message names the offending column.
    """


class ParameterError(UserInputError):
    """
    Fitting parameters are degenerate (k > n, n_folds > n, bad penalty grid).
    """
