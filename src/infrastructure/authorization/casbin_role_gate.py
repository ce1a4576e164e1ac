"""Casbin implementation of RoleGateProtocol.

Loads a static (role, entity, operation) capability matrix into a
pycasbin Enforcer:
- model.conf: request/policy definitions and an exact-match matcher
- policy.csv: one ``p`` line per capability

The matrix never grants more than the row-level rules: a pair missing
here is one that no row rule can allow for that role. Row rules still
decide everything the gate lets through.

Following hexagonal architecture:
- Infrastructure implements domain protocol (RoleGateProtocol)
- Domain doesn't know about Casbin
"""

from pathlib import Path
from typing import TYPE_CHECKING

import casbin

from src.domain.enums.permission import EntityType, Operation
from src.domain.enums.user_role import UserRole

if TYPE_CHECKING:
    from src.domain.protocols.logger_protocol import LoggerProtocol


AUTHORIZATION_DIR = Path(__file__).parent
MODEL_PATH = AUTHORIZATION_DIR / "model.conf"
POLICY_PATH = AUTHORIZATION_DIR / "policy.csv"


class CasbinRoleGate:
    """Casbin-based role capability gate.

    Attributes:
        _enforcer: Casbin Enforcer holding the capability matrix.
        _logger: Structured logger.
    """

    def __init__(self, enforcer: casbin.Enforcer, logger: "LoggerProtocol") -> None:
        """Initialize gate.

        Args:
            enforcer: Enforcer with the capability policy loaded.
            logger: Structured logger.
        """
        self._enforcer = enforcer
        self._logger = logger

    @classmethod
    def from_files(
        cls,
        logger: "LoggerProtocol",
        model_path: Path = MODEL_PATH,
        policy_path: Path = POLICY_PATH,
    ) -> "CasbinRoleGate":
        """Build a gate from a model file and a CSV policy file."""
        enforcer = casbin.Enforcer(str(model_path), str(policy_path))
        logger.info(
            "casbin_enforcer_initialized",
            model_path=str(model_path),
            policy_count=len(enforcer.get_policy()),
        )
        return cls(enforcer, logger)

    def allows(self, role: UserRole, entity: EntityType, operation: Operation) -> bool:
        """Check if role may attempt operation on entity.

        Fails closed: enforcer errors are logged and reported as False.
        """
        try:
            allowed = bool(self._enforcer.enforce(role.value, entity.value, operation.value))
        except Exception as e:
            self._logger.error(
                "role_gate_check_error",
                error=e,
                role=role.value,
                entity=entity.value,
                operation=operation.value,
            )
            return False

        self._logger.debug(
            "role_gate_check",
            role=role.value,
            entity=entity.value,
            operation=operation.value,
            allowed=allowed,
        )
        return allowed

    def capabilities(self) -> set[tuple[str, str, str]]:
        """All (role, entity, operation) triples in the matrix."""
        return {tuple(rule[:3]) for rule in self._enforcer.get_policy()}
