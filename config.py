"""
Configuration for github-issues-export.

Defaults are read from environment variables once, at import time, the same
way the rest of the tool expects them. Everything a run needs is collected
into an ExportConfig that is passed explicitly into the exporter.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path

__version__ = '0.1.0'

PROJECT_NAME = 'github-issues-export'
USER_AGENT = f'{PROJECT_NAME}/{__version__}'

TOKEN_ENV_VAR = 'GITHUB_TOKEN'
DEFAULT_ENV_FILE = '.env'

# GitHub Enterprise installations expose the API under a different base URL.
DEFAULT_API_URL = os.getenv('GITHUB_API_URL', 'https://api.github.com')
DEFAULT_OUTPUT_DIR = os.getenv('ISSUES_EXPORT_PATH', './md')

STATES = ('open', 'closed', 'all')
DEFAULT_STATE = 'open'


@dataclass
class ExportConfig:
    """
    Settings for a single export run.

    Attributes:
        token (str): GitHub access token.
        output_dir (Path): Directory receiving one markdown file per issue.
        state (str): Issue state filter used when listing issues.
        api_url (str): Base URL of the GitHub REST API.
    """

    token: str
    output_dir: Path = field(default_factory=lambda: Path(DEFAULT_OUTPUT_DIR))
    state: str = DEFAULT_STATE
    api_url: str = DEFAULT_API_URL

    def __post_init__(self):
        self.output_dir = Path(self.output_dir)
        if self.state not in STATES:
            raise ValueError(f"Invalid state {self.state!r}, expected one of {', '.join(STATES)}")
