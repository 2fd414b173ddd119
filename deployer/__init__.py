"""
Contract Deployer Package
Deploys a single contract and records its address and ABI
"""

from .config import DeploymentConfig, load_config
from .exceptions import (
    ArtifactNotFoundError,
    ArtifactParseError,
    ConfigurationError,
    ConfirmationTimeout,
    DeploymentError,
    DeploymentRevertedError,
    PersistenceError,
    SubmissionError,
)
from .pipeline import DeploymentPipeline
from .records import DeploymentRecord, DeploymentResult
from .reporter import FailureReporter

__all__ = [
    'DeploymentConfig',
    'load_config',
    'DeploymentPipeline',
    'FailureReporter',
    'DeploymentRecord',
    'DeploymentResult',
    'DeploymentError',
    'ConfigurationError',
    'SubmissionError',
    'DeploymentRevertedError',
    'ConfirmationTimeout',
    'ArtifactNotFoundError',
    'ArtifactParseError',
    'PersistenceError',
]
