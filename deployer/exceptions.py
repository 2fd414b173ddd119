"""
Deployment Exceptions
Error taxonomy for the deployment workflow
"""

from typing import Any, Optional


def rpc_error_code(error: BaseException) -> Optional[int]:
    """
    Extract the node's JSON-RPC error code from a client exception

    Args:
        error: Exception raised by web3 or the HTTP provider

    Returns:
        Error code or None if the exception carries none
    """
    # web3 >= 7 attaches the raw response
    response = getattr(error, 'rpc_response', None)
    if isinstance(response, dict):
        err = response.get('error')
        if isinstance(err, dict) and 'code' in err:
            return err['code']

    # Older clients raise ValueError({'code': ..., 'message': ...})
    if error.args and isinstance(error.args[0], dict):
        return error.args[0].get('code')

    return None


class DeploymentError(Exception):
    """Base exception for deployment workflow errors"""

    category = "DeploymentError"

    def __init__(self, message: str, code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.code = code

    def __str__(self) -> str:
        return self.message


class ConfigurationError(DeploymentError, ValueError):
    """Raised when the environment does not provide a usable configuration"""

    category = "ConfigurationError"

    def __init__(self, message: str, remediation: Optional[str] = None):
        super().__init__(message)
        self.remediation = remediation


class SubmissionError(DeploymentError):
    """Raised when the deployment transaction is rejected before inclusion"""

    category = "SubmissionError"


class DeploymentRevertedError(SubmissionError):
    """Raised when the deployment transaction was mined but created no contract"""

    category = "DeploymentReverted"

    def __init__(self, message: str, tx_hash: Optional[str] = None):
        super().__init__(message)
        self.tx_hash = tx_hash


class ConfirmationTimeout(DeploymentError, TimeoutError):
    """Raised when inclusion of a submitted transaction was not observed"""

    category = "ConfirmationTimeout"

    def __init__(self, message: str, tx_hash: Optional[str] = None, code: Optional[int] = None):
        super().__init__(message, code=code)
        self.tx_hash = tx_hash


class ArtifactNotFoundError(DeploymentError, FileNotFoundError):
    """Raised when the compiled build artifact is missing"""

    category = "ArtifactNotFound"


class ArtifactParseError(DeploymentError, ValueError):
    """Raised when the compiled build artifact cannot be read"""

    category = "ArtifactParseError"


class PersistenceError(DeploymentError, OSError):
    """
    Raised when the deployment record or ABI cannot be written

    The contract already exists on-chain at this point; the record is
    attached so the reporter can print it.
    """

    category = "PersistenceError"

    def __init__(self, message: str, record: Any = None, path: Any = None):
        super().__init__(message)
        self.record = record
        self.path = path
