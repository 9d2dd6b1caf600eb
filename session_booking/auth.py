"""
Identity bootstrap.

A provisioned token is tried first (handed over directly through
``INITIAL_AUTH_TOKEN`` or kept in Secret Manager); when that fails the
console falls back to an anonymous identity on the ADC project.  The core
only cares whether an identity exists: without one, submissions raise
``NotReady``.
"""

import logging
import uuid
from dataclasses import dataclass
from typing import Callable, Optional

import google.auth
from google.auth import exceptions as auth_exceptions
from google.auth import jwt
from google.cloud import exceptions as gexc
from google.cloud import secretmanager

from .config import Config


logger = logging.getLogger(__name__)

TOKEN = "token"
ANONYMOUS = "anonymous"

_BOOTSTRAP_ERRORS = (ValueError, auth_exceptions.GoogleAuthError, gexc.GoogleCloudError)


@dataclass(frozen=True)
class Identity:
    uid: str
    method: str
    project: Optional[str] = None

    @property
    def is_anonymous(self) -> bool:
        return self.method == ANONYMOUS


def _project_id(config: Config) -> str:
    _, project_id = google.auth.default()
    project_id = config.gcp_project or project_id
    if not project_id:
        raise ValueError("GCP project ID not found")
    return project_id


def load_provisioned_token(config: Config) -> Optional[str]:
    """The provisioned token, read from Secret Manager unless set directly."""
    if config.initial_auth_token:
        return config.initial_auth_token
    if not config.auth_token_secret:
        return None
    sm = secretmanager.SecretManagerServiceClient()
    name = f"projects/{_project_id(config)}/secrets/{config.auth_token_secret}/versions/latest"
    return sm.access_secret_version(name=name).payload.data.decode()


def identity_from_token(token: str, project: Optional[str] = None) -> Identity:
    """
    Identity named by the ``uid`` (or ``sub``) claim of a custom token.

    The signature is checked by the store on use, not here.
    """
    claims = jwt.decode(token, verify=False)
    uid = claims.get("uid") or claims.get("sub")
    if not uid:
        raise ValueError("Provisioned token carries no uid claim")
    return Identity(uid=uid, method=TOKEN, project=project)


def anonymous_identity(config: Config) -> Identity:
    return Identity(
        uid=f"anon-{uuid.uuid4().hex[:12]}",
        method=ANONYMOUS,
        project=_project_id(config),
    )


def establish(
    config: Config,
    token_loader: Callable[[Config], Optional[str]] = load_provisioned_token,
) -> Optional[Identity]:
    """Sign in with the provisioned token, else anonymously; ``None`` if both fail."""
    try:
        token = token_loader(config)
        if token:
            identity = identity_from_token(token, config.gcp_project)
            logger.info("Signed in with provisioned token as %s", identity.uid)
            return identity
    except _BOOTSTRAP_ERRORS as e:
        logger.error("Auth error: %s", e)

    try:
        identity = anonymous_identity(config)
    except _BOOTSTRAP_ERRORS as e:
        logger.error("Anonymous auth also failed: %s", e)
        return None
    logger.info("Signed in anonymously as %s", identity.uid)
    return identity
