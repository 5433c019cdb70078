"""Reference item service for quick-load-more."""

from qlm.service.main import create_app

__all__ = ["create_app"]
