"""Process-wide runtime flags.

``RuntimeFlags`` is populated once per invocation by the CLI from its
options (each bound to an environment variable) and from the persisted
configuration store, then handed to the toggle orchestrator.
"""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, replace
from enum import Enum


class SecretPolicy(Enum):
    """How secret create/delete failures affect an add-on toggle.

    BEST_EFFORT
        Log a warning for each failure and carry on; failures are never
        reported to the caller.
    AGGREGATE
        Attempt every secret operation and continue the toggle; once the
        add-on has been dispatched, raise all collected failures together.
    ALL_OR_NOTHING
        Stop at the first failure and raise it before touching the cluster.
    """

    BEST_EFFORT = "best-effort"
    AGGREGATE = "aggregate"
    ALL_OR_NOTHING = "all-or-nothing"


@dataclass(frozen=True)
class RuntimeFlags:
    """Flags read by the core but owned by the caller.

    Parameters
    ----------
    use_vendored_driver:
        Use the in-process driver implementation (``ClientType.LOCAL``)
        instead of the RPC plugin client.
    backend:
        Name of the registered backend supplying the cluster collaborators.
    secret_policy:
        Failure policy for registry credential secrets.
    abort_on_invalid_flag:
        Abort a toggle whose enable/disable value does not parse.  When
        ``False`` an unparsable value is logged and treated as disable.
    """

    use_vendored_driver: bool = False
    backend: str = "default"
    secret_policy: SecretPolicy = SecretPolicy.AGGREGATE
    abort_on_invalid_flag: bool = True

    def with_store(self, store: Mapping[str, object]) -> "RuntimeFlags":
        """Return a copy honouring the persisted ``use-vendored-driver`` setting."""
        value = store.get("use-vendored-driver")
        if isinstance(value, bool) and value and not self.use_vendored_driver:
            return replace(self, use_vendored_driver=True)
        return self
