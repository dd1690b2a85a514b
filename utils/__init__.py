"""
Utilities Package
Errors, logging and block-explorer verification
"""

from .exceptions import DeploymentError
from .logging_setup import configure_logging
from .verify import Verifier, should_verify

__all__ = [
    'DeploymentError',
    'configure_logging',
    'Verifier',
    'should_verify'
]
