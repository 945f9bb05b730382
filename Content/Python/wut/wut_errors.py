class WhatUsesThisError(Exception):
    """Base exception for What Uses This operations."""


class UnknownAssetError(WhatUsesThisError, KeyError):
    """Raised when an asset path is not present in the dependency index."""

    def __init__(self, asset_id: str):
        self.asset_id = asset_id
        super().__init__(f"Asset path {asset_id} not found in dependency index")

    def __str__(self):
        # KeyError would repr() the message
        return self.args[0]


class AssetDeletionError(WhatUsesThisError):
    """Raised by a host when it could not delete an asset."""

    def __init__(self, asset_id: str, reason: str = ""):
        self.asset_id = asset_id
        self.reason = reason
        message = f"Failed to delete asset {asset_id}"
        if reason:
            message += f": {reason}"
        super().__init__(message)
