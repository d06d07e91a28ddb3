from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Optional, Tuple

import json5
import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .config import MODES, Settings, get_settings

logger = logging.getLogger(__name__)

SAMPLES_DIR = Path(__file__).resolve().parent / 'samples'
ALLOWED_SAMPLES = (
    'json5-example.json5',
    'renovate-config.json5',
)


def parse_document(text: Optional[str], mode: str = 'JSON5') -> Any:
    """Parse editor text as JSON or JSON5.

    Blank text yields None. Parse errors are raised as ValueError.
    """
    if text is None or not text.strip():
        return None

    mode = (mode or 'JSON5').upper()
    if mode not in MODES:
        raise ValueError(f"Unknown mode {mode!r}; expected one of {', '.join(MODES)}.")

    try:
        if mode == 'JSON':
            return json.loads(text)
        return json5.loads(text)
    except RecursionError as exc:
        raise ValueError("document is nested too deeply") from exc
    except ValueError as exc:
        raise ValueError(str(exc)) from exc


def mode_for_name(name: str, mode: str = 'JSON5') -> str:
    """Files ending in .json5 are always parsed as JSON5."""
    return 'JSON5' if str(name or '').lower().endswith('.json5') else mode


def read_text_content(file_obj) -> Tuple[str, str]:
    """Read an uploaded file or file path; returns (text, file name)."""
    if file_obj is None:
        raise ValueError("No file uploaded.")

    if hasattr(file_obj, 'read'):
        if hasattr(file_obj, 'seek'):
            file_obj.seek(0)
        content = file_obj.read()
        name = getattr(file_obj, 'name', '') or ''
    else:
        path = file_obj.name if hasattr(file_obj, 'name') else file_obj
        name = str(path)
        with open(path, 'rb') as f:
            content = f.read()

    if isinstance(content, bytes):
        content = content.decode('utf-8')
    return content, name


def read_json_content(file_obj, mode: str = 'JSON5') -> Any:
    """Read and parse an uploaded file or file path."""
    content, name = read_text_content(file_obj)
    return parse_document(content, mode_for_name(name, mode))


def load_sample(name: str) -> str:
    """Return the text of a bundled example document."""
    if not name:
        raise ValueError("No sample name given.")
    if name not in ALLOWED_SAMPLES:
        raise ValueError(f"Sample {name!r} is not available.")
    path = SAMPLES_DIR / name
    try:
        return path.read_text(encoding='utf-8')
    except OSError as exc:
        raise ValueError(f"Failed to read sample {name}: {exc}") from exc


def build_session(settings: Settings) -> requests.Session:
    s = requests.Session()
    retry = Retry(
        total=settings.max_retries,
        backoff_factor=settings.backoff,
        status_forcelist=(429, 500, 502, 503, 504),
        allowed_methods=frozenset(["GET", "HEAD"]),
        raise_on_status=False,
    )
    adapter = HTTPAdapter(max_retries=retry)
    s.mount("http://", adapter)
    s.mount("https://", adapter)
    s.headers.update({"Accept": "application/json"})
    return s


def fetch_json(url: Optional[str] = None, settings: Optional[Settings] = None, session=None) -> Any:
    """Fetch and decode a JSON document, by default the Renovate schema."""
    settings = settings or get_settings()
    url = url or settings.schema_url
    own_session = session is None
    session = session or build_session(settings)

    try:
        response = session.get(url, timeout=settings.timeout)
    except requests.RequestException as exc:
        logger.warning("Fetching %s failed: %s", url, exc)
        raise ValueError(f"Failed to fetch schema: {exc}") from exc
    finally:
        if own_session:
            session.close()

    if not 200 <= response.status_code < 300:
        logger.warning("Fetching %s returned HTTP %s", url, response.status_code)
        raise ValueError(f"Failed to fetch schema: HTTP {response.status_code}")

    try:
        data = response.json()
    except ValueError as exc:
        logger.warning("Response from %s is not JSON: %s", url, exc)
        raise ValueError(f"Failed to fetch schema: response is not valid JSON ({exc})") from exc

    logger.info("Fetched %s", url)
    return data
