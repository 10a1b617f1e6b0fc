"""Gateway Route Table — static upstream→downstream mapping loaded once at startup.

Invariants:
    - Routes come from a JSON file, never from code
    - Routes are tried in file order; first match wins
    - {name} matches one path segment; a placeholder ending the template
      matches the rest of the path (catch-all, may span segments, never empty)
    - Every downstream placeholder must be bound by the upstream template
    - Empty upstreamHttpMethod accepts any method
    - Matching ignores case unless routeIsCaseSensitive is set
    - Paths are matched still percent-encoded; captured values are
      substituted downstream unchanged

File format (camelCase keys):
    {"routes": [{"upstreamPathTemplate": "/books/{everything}",
                 "upstreamHttpMethod": ["GET", "POST"],
                 "downstreamPathTemplate": "/api/books/{everything}",
                 "downstreamScheme": "http",
                 "downstreamHostAndPorts": [{"host": "localhost", "port": 5000}]}]}
"""

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, field_validator, model_validator
from pydantic.alias_generators import to_camel

from bookstore.core.domain_types import HttpMethod

logger = logging.getLogger(__name__)

PLACEHOLDER = re.compile(r"\{([A-Za-z_][A-Za-z0-9_]*)\}")


def template_placeholders(template: str) -> list[str]:
    return PLACEHOLDER.findall(template)


def compile_template(template: str, case_sensitive: bool = False) -> re.Pattern:
    """Compile an upstream path template into an anchored regex."""
    parts: list[str] = []
    pos = 0
    for m in PLACEHOLDER.finditer(template):
        parts.append(re.escape(template[pos:m.start()]))
        catch_all = m.end() == len(template)
        parts.append(f"(?P<{m.group(1)}>{'.+' if catch_all else '[^/]+'})")
        pos = m.end()
    parts.append(re.escape(template[pos:]))
    flags = 0 if case_sensitive else re.IGNORECASE
    return re.compile("^" + "".join(parts) + "$", flags)


def fill_template(template: str, params: dict[str, str]) -> str:
    return PLACEHOLDER.sub(lambda m: params[m.group(1)], template)


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class DownstreamHostAndPort(_CamelModel):
    host: str = Field(min_length=1)
    port: int = Field(ge=1, le=65535)


class GatewayRoute(_CamelModel):
    """One upstream pattern forwarded to one downstream service."""
    upstream_path_template: str
    upstream_http_method: list[HttpMethod] = Field(default_factory=list)
    downstream_path_template: str
    downstream_scheme: Literal["http", "https"] = "http"
    downstream_host_and_ports: list[DownstreamHostAndPort] = Field(min_length=1)
    route_is_case_sensitive: bool = False

    _pattern: re.Pattern = PrivateAttr()

    @field_validator("upstream_path_template", "downstream_path_template")
    @classmethod
    def check_leading_slash(cls, v: str) -> str:
        if not v.startswith("/"):
            raise ValueError("path templates must start with '/'")
        return v

    @field_validator("upstream_http_method", mode="before")
    @classmethod
    def upper_methods(cls, v):
        if isinstance(v, list):
            return [m.upper() if isinstance(m, str) else m for m in v]
        return v

    @model_validator(mode="after")
    def check_placeholders(self):
        upstream = template_placeholders(self.upstream_path_template)
        if len(upstream) != len(set(upstream)):
            raise ValueError(
                f"duplicate placeholder in {self.upstream_path_template}",
            )
        unbound = set(template_placeholders(self.downstream_path_template)) - set(upstream)
        if unbound:
            raise ValueError(
                f"downstream placeholders not bound upstream: {sorted(unbound)}",
            )
        self._pattern = compile_template(
            self.upstream_path_template, self.route_is_case_sensitive,
        )
        return self

    def accepts(self, method: str) -> bool:
        if not self.upstream_http_method:
            return True
        return method.upper() in {m.value for m in self.upstream_http_method}

    def match_path(self, path: str) -> dict[str, str] | None:
        m = self._pattern.match(path)
        return m.groupdict() if m else None

    def downstream_url(self, params: dict[str, str]) -> str:
        target = self.downstream_host_and_ports[0]
        path = fill_template(self.downstream_path_template, params)
        return f"{self.downstream_scheme}://{target.host}:{target.port}{path}"


@dataclass(frozen=True)
class RouteMatch:
    """A request resolved against the table."""
    route: GatewayRoute
    params: dict[str, str]
    downstream_url: str


class RouteTable(_CamelModel):
    """Ordered gateway routes."""
    routes: list[GatewayRoute] = Field(default_factory=list)

    def match(self, method: str, path: str) -> RouteMatch | None:
        for route in self.routes:
            if not route.accepts(method):
                continue
            params = route.match_path(path)
            if params is not None:
                return RouteMatch(route, params, route.downstream_url(params))
        return None

    def __len__(self) -> int:
        return len(self.routes)


def load_route_table(path: str | Path) -> RouteTable:
    """Read and validate the route table file."""
    table = RouteTable.model_validate_json(Path(path).read_text(encoding="utf-8"))
    logger.info(f"Loaded {len(table)} gateway routes from {path}")
    return table
