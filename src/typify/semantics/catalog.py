"""
Name-Pattern Catalog.

Maps lower-cased parameter names to a type verdict drawn from well-known
library conventions (Express, MongoDB, Mongoose, mysql2, Socket.IO,
jsonwebtoken, axios, node-fetch).

The catalog is consulted only when the usage classifier found no structural
evidence. Predicates overlap (``model`` vs ``*model``, ``socket`` vs
``*socket*``), so the table is an ordered sequence evaluated top to bottom and
the first matching entry wins.

The module also holds the bundle definitions and the bundle-trigger predicates
that decide which import bundles a file needs. All tables are immutable after
import and safe to share between conversions.
"""

from dataclasses import dataclass
from typing import Callable, Dict, FrozenSet, Optional, Tuple

from typify.enums import Bundle
from typify.semantics.schema import BundleSpec
from typify.semantics.types import ANY, NamedReference, TypeVerdict

NamePredicate = Callable[[str, FrozenSet[Bundle]], bool]


def exact(*names: str) -> NamePredicate:
  """Matches any of the given names exactly."""
  return lambda name, _active: name in names


def suffix(tail: str) -> NamePredicate:
  """Matches names ending with ``tail``."""
  return lambda name, _active: name.endswith(tail)


def contains(part: str) -> NamePredicate:
  """Matches names containing ``part``."""
  return lambda name, _active: part in name


def any_of(*predicates: NamePredicate) -> NamePredicate:
  """Matches if any predicate matches, evaluated left to right."""
  return lambda name, active: any(p(name, active) for p in predicates)


def when_active(bundle: Bundle, predicate: NamePredicate) -> NamePredicate:
  """Matches only once ``bundle`` has been raised earlier in the file."""
  return lambda name, active: bundle in active and predicate(name, active)


@dataclass(frozen=True)
class CatalogEntry:
  """
  One row of the name-pattern table.
  """

  label: str
  predicate: NamePredicate
  verdict: TypeVerdict
  bundle: Bundle


@dataclass(frozen=True)
class CatalogMatch:
  """
  Result of a successful catalog lookup.
  """

  entry: CatalogEntry

  @property
  def verdict(self) -> TypeVerdict:
    return self.entry.verdict

  @property
  def bundle(self) -> Bundle:
    return self.entry.bundle


BUNDLES: Dict[Bundle, BundleSpec] = {
  Bundle.EXPRESS: BundleSpec(
    key=Bundle.EXPRESS,
    source="express",
    names=["Request", "Response", "NextFunction"],
    description="Express request handlers",
  ),
  Bundle.MONGODB: BundleSpec(
    key=Bundle.MONGODB,
    source="mongodb",
    names=["Db", "Collection", "Document"],
    description="MongoDB native driver",
  ),
  Bundle.MONGOOSE: BundleSpec(
    key=Bundle.MONGOOSE,
    source="mongoose",
    names=["Model", "Schema", "Document"],
    description="Mongoose ODM",
  ),
  Bundle.SQL: BundleSpec(
    key=Bundle.SQL,
    source="mysql2/promise",
    names=["Connection", "Pool", "Query"],
    description="mysql2 promise API",
  ),
  Bundle.SOCKETIO: BundleSpec(
    key=Bundle.SOCKETIO,
    source="socket.io",
    names=["Socket", "Server"],
    description="Socket.IO server",
  ),
  Bundle.JWT: BundleSpec(
    key=Bundle.JWT,
    source="jsonwebtoken",
    names=["JwtPayload"],
    description="JSON Web Tokens",
  ),
  Bundle.AXIOS: BundleSpec(
    key=Bundle.AXIOS,
    source="axios",
    names=["AxiosInstance", "AxiosResponse"],
    description="axios HTTP client",
  ),
  Bundle.FETCH: BundleSpec(
    key=Bundle.FETCH,
    source="node-fetch",
    names=["RequestInit", "Response"],
    description="node-fetch",
  ),
}

# Bundle imports are emitted in this order, ahead of require-derived imports.
BUNDLE_EMIT_ORDER: Tuple[Bundle, ...] = (
  Bundle.EXPRESS,
  Bundle.MONGODB,
  Bundle.MONGOOSE,
  Bundle.SQL,
  Bundle.SOCKETIO,
  Bundle.JWT,
  Bundle.AXIOS,
  Bundle.FETCH,
)

# Exact names are listed before suffix/substring checks within each entry.
CATALOG: Tuple[CatalogEntry, ...] = (
  CatalogEntry("db", exact("db", "database"), NamedReference("Db"), Bundle.MONGODB),
  CatalogEntry("collection", exact("collection"), NamedReference("Collection"), Bundle.MONGODB),
  CatalogEntry("model", any_of(exact("model"), suffix("model")), NamedReference("Model", ANY), Bundle.MONGOOSE),
  CatalogEntry("schema", exact("schema"), NamedReference("Schema"), Bundle.MONGOOSE),
  CatalogEntry("connection", exact("connection", "conn"), NamedReference("Connection"), Bundle.SQL),
  CatalogEntry("pool", exact("pool"), NamedReference("Pool"), Bundle.SQL),
  CatalogEntry("socket", any_of(exact("socket"), contains("socket")), NamedReference("Socket"), Bundle.SOCKETIO),
  CatalogEntry("token", exact("token", "jwt"), NamedReference("JwtPayload"), Bundle.JWT),
  CatalogEntry("axios", any_of(contains("axios"), exact("client")), NamedReference("AxiosInstance"), Bundle.AXIOS),
  CatalogEntry(
    "axios-response",
    when_active(Bundle.AXIOS, exact("response")),
    NamedReference("AxiosResponse", ANY),
    Bundle.AXIOS,
  ),
  CatalogEntry("fetch", any_of(contains("fetch"), exact("init")), NamedReference("RequestInit"), Bundle.FETCH),
)

BUNDLE_TRIGGERS: Tuple[Tuple[Bundle, NamePredicate], ...] = (
  (Bundle.EXPRESS, exact("req", "request", "res", "response", "next")),
  (Bundle.MONGODB, exact("db", "database", "collection", "cursor")),
  (Bundle.MONGOOSE, any_of(exact("model", "schema", "document"), suffix("model"))),
  (Bundle.SQL, exact("connection", "conn", "query", "pool")),
  (Bundle.SOCKETIO, any_of(exact("socket", "io"), contains("socket"))),
  (Bundle.JWT, any_of(exact("token", "jwt"), contains("token"))),
  (Bundle.AXIOS, any_of(contains("axios"), contains("http"))),
  (Bundle.FETCH, any_of(contains("fetch"), exact("response"))),
)


def lookup(name: str, active: FrozenSet[Bundle] = frozenset()) -> Optional[CatalogMatch]:
  """
  Finds the first catalog entry matching a parameter name.

  Args:
      name (str): The parameter name. Lower-cased before matching.
      active (FrozenSet[Bundle]): Bundles already raised in the current file.
          Some entries only apply once a related bundle is in use.

  Returns:
      Optional[CatalogMatch]: The match, or None if no entry applies.
  """
  lowered = name.lower()
  for entry in CATALOG:
    if entry.predicate(lowered, active):
      return CatalogMatch(entry)
  return None


def triggered_bundles(name: str) -> Tuple[Bundle, ...]:
  """
  Evaluates every bundle-trigger predicate over a raw parameter name.

  Args:
      name (str): The parameter name. Lower-cased before matching.

  Returns:
      Tuple[Bundle, ...]: Bundles the name triggers, in trigger-table order.
  """
  lowered = name.lower()
  return tuple(bundle for bundle, predicate in BUNDLE_TRIGGERS if predicate(lowered, frozenset()))
