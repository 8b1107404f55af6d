"""Page acquisition with an ordered chain of fetch strategies.

The chain is a list of ``(label, fetch)`` pairs tried one after another; the
first strategy that returns a non-empty body wins and later ones are never
called. Strategies, in order:

1. a direct fetch of the page,
2. each configured relay endpoint, with the target URL substituted into the
   relay template,
3. a callback relay: a JSONP request whose response invokes a uniquely named
   callback registered in :data:`CALLBACK_REGISTRY`, awaited with a timeout.

With ``ACQUISITION_MODE=direct`` only the first strategy is used.
"""
from __future__ import annotations

import json
import re
import threading
import time
import uuid
from concurrent.futures import Future, InvalidStateError, TimeoutError as FutureTimeoutError
from contextlib import contextmanager
from typing import Any, Callable, Iterator, Sequence
from urllib.parse import quote

import requests

from ..config import build_http_session, get_http_session, get_setting
from ..errors import AcquisitionError
from ..logging_config import get_logger

logger = get_logger(__name__)

FetchStrategy = Callable[[str], str]


class EmptyResponseError(Exception):
    """A strategy answered successfully but without any page content."""


class CallbackRegistry:
    """Pending callbacks keyed by a per-request token.

    Each registration is scoped: the token is removed when the ``register``
    block exits, whatever the outcome, and a delivery for a token that is no
    longer registered is dropped.
    """

    def __init__(self, prefix: str = "recipe_importer_cb") -> None:
        self._prefix = prefix
        self._pending: dict[str, Future] = {}
        self._lock = threading.Lock()

    @contextmanager
    def register(self) -> Iterator[tuple[str, Future]]:
        token = f"{self._prefix}_{uuid.uuid4().hex}"
        future: Future = Future()
        with self._lock:
            self._pending[token] = future
        try:
            yield token, future
        finally:
            with self._lock:
                self._pending.pop(token, None)
            future.cancel()

    def _pending_future(self, token: str) -> Future | None:
        with self._lock:
            future = self._pending.get(token)
        if future is None or future.done():
            return None
        return future

    def deliver(self, token: str, payload: Any) -> bool:
        """Invoke the callback registered under ``token``. Returns ``False`` if it is gone."""
        future = self._pending_future(token)
        if future is None:
            logger.debug("Dropping late callback for %s", token)
            return False
        try:
            future.set_result(payload)
        except InvalidStateError:
            return False
        return True

    def fail(self, token: str, error: BaseException) -> bool:
        """Report that the request behind ``token`` failed before its callback fired."""
        future = self._pending_future(token)
        if future is None:
            return False
        try:
            future.set_exception(error)
        except InvalidStateError:
            return False
        return True

    def __contains__(self, token: str) -> bool:
        with self._lock:
            return token in self._pending

    def __len__(self) -> int:
        with self._lock:
            return len(self._pending)


CALLBACK_REGISTRY = CallbackRegistry()

# Upper bound on waiting for a callback worker once its token is released. A
# worker still blocked in its request after this is a daemon and ends with it.
WORKER_JOIN_SECONDS = 1.0


def _response_text(response: requests.Response) -> str:
    response.raise_for_status()
    text = response.text
    if not text or not text.strip():
        raise EmptyResponseError(f"Empty response from {response.url}")
    return text


def fetch_direct(url: str) -> str:
    """Fetch ``url`` itself."""
    response = get_http_session().get(url, timeout=get_setting("request_timeout"))
    return _response_text(response)


def relay_url(template: str, url: str) -> str:
    return template.format(url=quote(url, safe=""))


def fetch_via_relay(url: str, template: str) -> str:
    """Fetch ``url`` through a relay endpoint built from ``template``."""
    response = get_http_session().get(
        relay_url(template, url), timeout=get_setting("request_timeout")
    )
    return _response_text(response)


def parse_callback_payload(script: str, token: str) -> str:
    """Return the page contents passed to ``token(...)`` in a JSONP response."""
    match = re.match(
        rf"^\s*(?:/\*\*/\s*)?{re.escape(token)}\s*\((?P<body>.*)\)\s*;?\s*$",
        script,
        re.DOTALL,
    )
    if not match:
        raise ValueError(f"Response does not invoke callback {token}")

    payload = json.loads(match.group("body"))
    contents = payload.get("contents") if isinstance(payload, dict) else payload
    if not isinstance(contents, str):
        raise ValueError("Callback payload carries no page contents")
    return contents


def _load_callback_script(
    request_url: str,
    token: str,
    registry: CallbackRegistry,
    session: requests.Session,
) -> None:
    try:
        response = session.get(request_url, timeout=get_setting("request_timeout"))
        response.raise_for_status()
        contents = parse_callback_payload(response.text, token)
    except Exception as exc:  # noqa: BLE001 - reported to the waiting caller
        registry.fail(token, exc)
        return
    registry.deliver(token, contents)


def fetch_via_callback(
    url: str,
    registry: CallbackRegistry | None = None,
    timeout: float | None = None,
) -> str:
    """Fetch ``url`` through the JSONP relay, waiting for its callback.

    The callback token and the request's session are released on success,
    failure and timeout.
    """
    registry = registry if registry is not None else CALLBACK_REGISTRY
    timeout = timeout if timeout is not None else get_setting("callback_timeout")
    session = build_http_session()

    with registry.register() as (token, future):
        request_url = get_setting("jsonp_relay_template").format(
            url=quote(url, safe=""), callback=token
        )
        worker = threading.Thread(
            target=_load_callback_script,
            args=(request_url, token, registry, session),
            name=f"callback-{token[-8:]}",
            daemon=True,
        )
        try:
            worker.start()
            try:
                contents = future.result(timeout=timeout)
            except FutureTimeoutError as exc:
                raise TimeoutError(
                    f"Callback relay timed out after {timeout:g} seconds"
                ) from exc
        finally:
            session.close()
            if worker.is_alive():
                worker.join(WORKER_JOIN_SECONDS)
            if worker.is_alive():
                logger.warning("Callback worker %s still running after release", worker.name)

    if not contents.strip():
        raise EmptyResponseError("Empty contents from callback relay")
    return contents


def default_strategies() -> list[tuple[str, FetchStrategy]]:
    """Build the configured strategy chain."""
    strategies: list[tuple[str, FetchStrategy]] = [("direct", fetch_direct)]
    if get_setting("acquisition_mode") == "direct":
        return strategies

    for template in get_setting("relay_templates"):
        strategies.append(
            (f"relay {template}", lambda url, template=template: fetch_via_relay(url, template))
        )
    strategies.append(("callback relay", fetch_via_callback))
    return strategies


def acquire_html(
    url: str,
    strategies: Sequence[tuple[str, FetchStrategy]] | None = None,
) -> str:
    """Return the HTML of ``url`` from the first strategy that succeeds.

    Raises :class:`AcquisitionError` carrying the last failure when every
    strategy fails.
    """
    if strategies is None:
        strategies = default_strategies()

    last_error: BaseException | None = None
    for label, fetch in strategies:
        start_time = time.time()
        logger.info("Fetching %s via %s", url, label)
        try:
            html = fetch(url)
        except (requests.RequestException, EmptyResponseError, ValueError, OSError) as exc:
            logger.warning("Fetch via %s failed for %s: %s", label, url, exc)
            last_error = exc
            continue

        logger.info(
            "Retrieved HTML via %s in %.2f seconds - Size: %.1fKB",
            label,
            time.time() - start_time,
            len(html) / 1024,
        )
        return html

    logger.error("All %s fetch strategies failed for %s", len(strategies), url)
    raise AcquisitionError(url, last_error) from last_error


__all__ = [
    "CALLBACK_REGISTRY",
    "CallbackRegistry",
    "EmptyResponseError",
    "acquire_html",
    "default_strategies",
    "fetch_direct",
    "fetch_via_callback",
    "fetch_via_relay",
    "parse_callback_payload",
    "relay_url",
]
