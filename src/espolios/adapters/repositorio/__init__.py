from .auth import RepositorioAuthenticator
from .token_cache import TokenCache
from .upload_client import RepositorioUploadClient

__all__ = ["RepositorioAuthenticator", "TokenCache", "RepositorioUploadClient"]
