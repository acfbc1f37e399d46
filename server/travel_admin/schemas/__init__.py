"""Pydantic schemas for request/response validation."""

from .auth import *  # noqa: F403
from .common import *  # noqa: F403
from .enquiry import *  # noqa: F403
from .flight import *  # noqa: F403
from .hotel import *  # noqa: F403
from .package import *  # noqa: F403
from .visa import *  # noqa: F403
