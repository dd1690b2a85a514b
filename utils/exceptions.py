"""
Exceptions
Error types raised by deployment, verification and interaction code
"""


class DeploymentError(Exception):
    """Base exception for deployment-related errors"""

    pass


class ConfigurationError(DeploymentError, ValueError):
    """Raised when required configuration or environment is missing"""

    pass


class NetworkNotFoundError(DeploymentError, ValueError):
    """Raised when the requested network is not configured"""

    pass


class NetworkConnectionError(DeploymentError, ConnectionError):
    """Raised when the RPC node cannot be reached"""

    pass


class ArtifactNotFoundError(DeploymentError, FileNotFoundError):
    """Raised when a compiled contract artifact is missing"""

    pass


class DeploymentNotFoundError(DeploymentError, FileNotFoundError):
    """Raised when no saved deployment exists for a contract"""

    pass


class TransactionFailedError(DeploymentError):
    """Raised when a mined transaction reverted"""

    def __init__(self, tx_hash: str, receipt=None):
        self.tx_hash = tx_hash
        self.receipt = receipt
        super().__init__(f"Transaction {tx_hash} reverted")


class ConfirmationTimeoutError(DeploymentError, TimeoutError):
    """Raised when a transaction does not reach its confirmation count in time"""

    pass


class EventNotFoundError(DeploymentError, ValueError):
    """Raised when a receipt carries no decodable event"""

    pass


class TokenIdNotFoundError(DeploymentError, ValueError):
    """Raised when a mint event does not carry a token identifier"""

    pass


class VerificationError(DeploymentError):
    """Raised when the block explorer rejects a verification request"""

    pass
