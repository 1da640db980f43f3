"""
Canonical file categories a check can return from ``interesting_files``.

Patterns are searched (not fully matched) against a file path, so they work
for relative and absolute paths alike.
"""

import re

CONTROLLER_FILES: re.Pattern[str] = re.compile(r"controllers/.*\.py$")
MIGRATION_FILES: re.Pattern[str] = re.compile(r"(?:^|/)migrations/.*\.py$")
MODEL_FILES: re.Pattern[str] = re.compile(r"models/.*\.py$|(?:^|/)models\.py$")
MAILER_FILES: re.Pattern[str] = re.compile(r"models/.*mailer\.py$|mailers/.*mailer\.py$")
VIEW_FILES: re.Pattern[str] = re.compile(r"(?:views|templates)/.*\.(?:html|jinja2?)$")
PARTIAL_VIEW_FILES: re.Pattern[str] = re.compile(r"(?:views|templates)/(?:.*/)?_[^/]*\.(?:html|jinja2?)$")
ROUTE_FILES: re.Pattern[str] = re.compile(r"config/routes[^/]*\.py$|(?:^|/)urls\.py$")
SCHEMA_FILE: re.Pattern[str] = re.compile(r"db/schema\.py$")
HELPER_FILES: re.Pattern[str] = re.compile(r"helpers.*\.py$")
