"""Authorization infrastructure package.

- model.conf: Casbin model (exact role/entity/operation match)
- policy.csv: role capability matrix
- casbin_role_gate.py: CasbinRoleGate implementing RoleGateProtocol
"""

from src.infrastructure.authorization.casbin_role_gate import CasbinRoleGate

__all__ = ["CasbinRoleGate"]
