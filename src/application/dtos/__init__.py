"""Application DTOs."""

from src.application.dtos.policy_dtos import PolicyRequest

__all__ = ["PolicyRequest"]
