"""
Header Generator
================
Caller-side construction of HashBack authentication headers.
"""

import base64
import json
import uuid
from abc import ABC, abstractmethod
from typing import Callable, Optional, Union

import httpx
import structlog

from .config import DEFAULT_ROUNDS
from .exceptions import GeneratorConfigError
from .hashing import SCHEME_PREFIX, VERSION, compute_hash, generate_unus
from .models import GeneratedAuth
from .policies import ClockService, system_clock

logger = structlog.get_logger(__name__)

VerifyUrlService = Callable[[uuid.UUID], Union[httpx.URL, str]]


def _id_text(verification_id: uuid.UUID) -> str:
    return str(verification_id).upper()


class VerifyUrlStrategy(ABC):
    """Builds the Verify URL for a verification id."""

    @abstractmethod
    def __call__(self, verification_id: uuid.UUID) -> httpx.URL:
        ...


class QueryStringVerifyUrl(VerifyUrlStrategy):
    """Sets the id as a named query string parameter on a base URL."""

    def __init__(self, base_url: str, name: str):
        self.base_url = httpx.URL(base_url)
        self.name = name

    def __call__(self, verification_id: uuid.UUID) -> httpx.URL:
        return self.base_url.copy_set_param(self.name, _id_text(verification_id))


class FileInFolderVerifyUrl(VerifyUrlStrategy):
    """
    Names a file after the id inside a folder URL.

    Any query string or fragment on the folder URL is dropped and the
    path always ends with a slash. The extension always starts with a dot.
    """

    def __init__(self, folder_url: str, file_ext: str):
        folder = httpx.URL(folder_url)
        path = folder.path if folder.path.endswith("/") else folder.path + "/"
        self.folder_url = folder.copy_with(path=path, query=None, fragment=None)
        self.file_ext = file_ext if file_ext.startswith(".") else "." + file_ext

    def __call__(self, verification_id: uuid.UUID) -> httpx.URL:
        return self.folder_url.join(f"{_id_text(verification_id)}{self.file_ext}")


def _unset_verify_url(verification_id: uuid.UUID) -> httpx.URL:
    raise GeneratorConfigError(
        "Called generate_auth_header without setting a Verify URL strategy."
    )


def generate_auth_header(
    verification_id: uuid.UUID,
    host: str,
    clock: ClockService,
    rounds: int,
    verify_url: VerifyUrlService,
) -> GeneratedAuth:
    """
    Generate a HashBack header and its verification hash.

    Args:
        verification_id: Id embedded in the Verify URL
        host: Issuer host name to put in the header
        clock: Source of the Now value
        rounds: PBKDF2 iteration count
        verify_url: Strategy turning the id into a Verify URL

    Returns:
        GeneratedAuth with the header to send and the hash to publish
    """
    auth_json = {
        "Version": VERSION,
        "Host": host,
        "Now": clock(),
        "Unus": generate_unus(),
        "Rounds": rounds,
        "Verify": str(verify_url(verification_id)),
    }

    # ASCII-only so literal-JSON and base64 transports hash the same bytes
    auth_bytes = json.dumps(auth_json, separators=(",", ":")).encode("ascii")
    auth_base64 = base64.b64encode(auth_bytes).decode("ascii")
    verification_hash = compute_hash(auth_bytes, rounds)

    logger.debug(
        "HashBack header generated",
        verification_id=str(verification_id),
        rounds=rounds,
    )

    return GeneratedAuth(
        verification_id=verification_id,
        auth_header=f"{SCHEME_PREFIX} {auth_base64}",
        verification_hash=verification_hash,
    )


class HashBackGenerator:
    """High-level HashBack header generation."""

    def __init__(
        self,
        host: Optional[str] = None,
        rounds: int = DEFAULT_ROUNDS,
        clock: ClockService = system_clock,
        verify_url: Optional[VerifyUrlService] = None,
    ):
        self.host = host
        self.rounds = rounds
        self.clock = clock
        self.verify_url: VerifyUrlService = verify_url or _unset_verify_url

    def set_verify_by_query_string(self, base_url: str, name: str) -> None:
        self.verify_url = QueryStringVerifyUrl(base_url, name)

    def set_verify_by_file_in_folder(self, folder_url: str, file_ext: str) -> None:
        self.verify_url = FileInFolderVerifyUrl(folder_url, file_ext)

    def generate_auth_header(
        self,
        verification_id: Optional[uuid.UUID] = None,
        host: Optional[str] = None,
    ) -> GeneratedAuth:
        """
        Generate a header using this generator's settings.

        Args:
            verification_id: Id for the Verify URL (random if omitted)
            host: Issuer host, overriding the host attribute

        Raises:
            GeneratorConfigError: If no host or Verify URL strategy is set
        """
        host = host or self.host
        if host is None:
            raise GeneratorConfigError(
                "Called generate_auth_header without setting a host."
            )

        return generate_auth_header(
            verification_id=verification_id or uuid.uuid4(),
            host=host,
            clock=self.clock,
            rounds=self.rounds,
            verify_url=self.verify_url,
        )
