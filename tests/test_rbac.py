import pytest

from stockpro.core.errors import Forbidden, Unauthenticated
from stockpro.core.rbac import PERMISSIONS, Caller, Role, authorize


def _caller(role):
    return Caller(user_id="u1", role=role)


@pytest.mark.parametrize("operation", ["sale:create", "purchase:create", "order:create", "note:create"])
def test_everyone_can_record_daily_operations(operation):
    for role in Role:
        assert authorize(_caller(role), operation).role == role


@pytest.mark.parametrize("operation", ["order:status", "payment:create", "debt:create", "report:view", "product:create"])
def test_manager_operations(operation):
    authorize(_caller(Role.ADMIN), operation)
    authorize(_caller(Role.GERENTE), operation)
    with pytest.raises(Forbidden):
        authorize(_caller(Role.FUNCIONARIO), operation)


@pytest.mark.parametrize("operation", ["order:edit", "order:delete", "user:create"])
def test_admin_only_operations(operation):
    authorize(_caller(Role.ADMIN), operation)
    for role in (Role.GERENTE, Role.FUNCIONARIO):
        with pytest.raises(Forbidden):
            authorize(_caller(role), operation)


def test_missing_caller_is_unauthenticated():
    with pytest.raises(Unauthenticated):
        authorize(None, "sale:create")


def test_unknown_operation_is_a_programming_error():
    with pytest.raises(KeyError):
        authorize(_caller(Role.ADMIN), "sale:destroy")


def test_admin_is_allowed_everywhere():
    for operation in PERMISSIONS:
        authorize(_caller(Role.ADMIN), operation)