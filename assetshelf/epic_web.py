"""Web session with the store and EULA status queries."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Mapping

import requests

log = logging.getLogger(__name__)

USER_AGENT = (
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/103.0.0.0 Safari/537.36"
)

REPUTATION_URL = "https://www.epicgames.com/id/api/reputation"
EXCHANGE_URL = "https://www.epicgames.com/id/api/exchange"
REDIRECT_URL = "https://www.epicgames.com/id/api/redirect?"
SET_SID_URL = "https://www.unrealengine.com/id/api/set-sid?sid={sid}"
GRAPHQL_URL = "https://graphql.unrealengine.com/ue/graphql"

_EULA_QUERY = (
    '{    Eula {        hasAccountAccepted(id: "unreal_engine", locale: "en", '
    'accountId: "{account_id}"){            accepted            key'
    "            locale            version        }    }}"
)


def _require(data: Any, key: str, kind: type | tuple[type, ...]) -> Any:
    if not isinstance(data, Mapping) or key not in data:
        raise ValueError(f"missing field {key!r}")
    value = data[key]
    if not isinstance(value, kind):
        raise ValueError(f"field {key!r} has the wrong type")
    return value


@dataclass
class RedirectResponse:
    redirect_url: str
    authorization_code: Any
    sid: str

    @classmethod
    def from_dict(cls, data: Any) -> "RedirectResponse":
        if not isinstance(data, Mapping) or "authorizationCode" not in data:
            raise ValueError("missing field 'authorizationCode'")
        return cls(
            redirect_url=_require(data, "redirectUrl", str),
            authorization_code=data["authorizationCode"],
            sid=_require(data, "sid", str),
        )


@dataclass
class HasAccountAccepted:
    accepted: bool
    key: str
    locale: str
    version: int

    @classmethod
    def from_dict(cls, data: Any) -> "HasAccountAccepted":
        version = _require(data, "version", int)
        if isinstance(version, bool):
            raise ValueError("field 'version' has the wrong type")
        return cls(
            accepted=_require(data, "accepted", bool),
            key=_require(data, "key", str),
            locale=_require(data, "locale", str),
            version=version,
        )


@dataclass
class EulaError:
    message: str
    correlation_id: str
    service_response: str
    stack: Any = None
    path: list[str] | None = None

    @classmethod
    def from_dict(cls, data: Any) -> "EulaError":
        path = data.get("path") if isinstance(data, Mapping) else None
        return cls(
            message=_require(data, "message", str),
            correlation_id=_require(data, "correlationId", str),
            service_response=_require(data, "serviceResponse", str),
            stack=data.get("stack"),
            path=path,
        )


def parse_eula_response(text: str) -> tuple[HasAccountAccepted | None, list[EulaError]]:
    """Parse a EULA query response into its acceptance record and errors.

    Raises ``ValueError`` when the text is not a well-formed response.
    """
    document = json.loads(text)
    eula = _require(_require(document, "data", Mapping), "Eula", Mapping)
    accepted_data = eula.get("hasAccountAccepted")
    accepted = (
        None if accepted_data is None else HasAccountAccepted.from_dict(accepted_data)
    )
    raw_errors = document.get("errors")
    if raw_errors is None:
        errors: list[EulaError] = []
    elif isinstance(raw_errors, list):
        errors = [EulaError.from_dict(item) for item in raw_errors]
    else:
        raise ValueError("field 'errors' has the wrong type")
    return accepted, errors


class EpicWeb:
    """A cookie-keeping HTTP session with the store's web services."""

    def __init__(self, session: requests.Session | None = None):
        self.session = session if session is not None else requests.Session()
        self.session.headers["User-Agent"] = USER_AGENT

    def start_session(self, exchange_token: str) -> None:
        """Turn an exchange code into a logged-in web session.

        Failures are logged; each step runs regardless of the previous one.
        """
        csrf = ""
        try:
            response = self.session.get(REPUTATION_URL)
        except requests.RequestException as exc:
            log.error("Failed to run query: %s", exc)
        else:
            for cookie in response.cookies:
                if cookie.name == "XSRF-TOKEN":
                    csrf = cookie.value or ""

        try:
            self.session.post(
                EXCHANGE_URL,
                json={"exchangeCode": exchange_token},
                headers={"x-xsrf-token": csrf},
            )
        except requests.RequestException as exc:
            log.error("Failed to run query: %s", exc)

        sid = ""
        try:
            response = self.session.get(REDIRECT_URL)
        except requests.RequestException as exc:
            log.error("Failed to run query: %s", exc)
        else:
            try:
                sid = RedirectResponse.from_dict(response.json()).sid
            except ValueError as exc:
                log.error("Error parsing json: %r", exc)

        try:
            self.session.get(SET_SID_URL.format(sid=sid))
        except requests.RequestException as exc:
            log.error("Failed to run query: %s", exc)

    def validate_eula(self, account_id: str) -> bool:
        """Tell whether the account has accepted the engine EULA."""
        query = _EULA_QUERY.replace("{account_id}", account_id)
        try:
            response = self.session.post(GRAPHQL_URL, json={"query": query})
        except requests.RequestException as exc:
            log.error("Failed to run query: %s", exc)
            return False
        text = response.text
        try:
            accepted, errors = parse_eula_response(text)
        except ValueError as exc:
            log.error("Failed to parse EULA json: %s", exc)
            log.debug("Response: %s", text)
            return False
        if accepted is None:
            for error in errors:
                log.error(
                    "Failed to query EULA status: %s with response: %s",
                    error.message,
                    error.service_response,
                )
            return False
        return accepted.accepted

    def run_query(self, url: str) -> Any:
        """GET ``url`` and return its decoded JSON body."""
        try:
            response = self.session.get(url)
        except requests.RequestException as exc:
            log.error("Failed to run query: %s", exc)
            raise
        return response.json()