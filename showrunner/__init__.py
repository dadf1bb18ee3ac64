"""
Showrunner - Screenplay Structuring and Casting Preparation

Turns generated screenplay text into a typed, paginated document, resolves
the characters it mentions into a canonical registry, and prepares batched
casting profile generation with resilient decoding of the responses.

Version: 1.0.0
"""

__version__ = "1.0.0"
__project__ = "Showrunner"

from pathlib import Path

# Load environment variables before anything reads them
from showrunner.core.env_loader import ensure_env_loaded
ensure_env_loaded()

# Package root directory
PACKAGE_ROOT = Path(__file__).parent
PROJECT_ROOT = PACKAGE_ROOT.parent

__all__ = [
    "__version__",
    "__project__",
    "PACKAGE_ROOT",
    "PROJECT_ROOT",
]
