"""HTTP surface for finchat."""

from finchat.web.app import create_app

__all__ = ["create_app"]
