import logging

from sqlalchemy import inspect

from ..core.errors import (
    AdminEligibilityError,
    AuthenticationError,
    PermissionDeniedError,
    RelationshipPreconditionError,
)
from ..core.gateway import Gateway
from ..core.result import Result
from ..core.security import dummy_hash, hash_password, verify_password
from ..core.settings import settings
from ..models.Account import Account
from ..models.Employee import Employee
from .session import AccountSession

__all__ = [
    "hash_password",
    "verify_password",
    "authenticate",
    "bound_employee",
    "can_be_admin",
    "employee_can_administer",
    "promote_to_admin",
    "require_admin",
]

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"


def authenticate(gateway: Gateway, email: str, password: str) -> Result[Account]:
    # Unknown emails still pay for one hash check so misses and wrong
    # passwords are indistinguishable.
    account = gateway.first(Account, Account.email == (email or "").strip())
    if account is None:
        verify_password(password or "", dummy_hash())
        logger.info("Failed login attempt")
        return Result.failure(AuthenticationError(INVALID_CREDENTIALS))
    if not account.verify_password(password or ""):
        logger.info("Failed login attempt for account %s", account.id)
        return Result.failure(AuthenticationError(INVALID_CREDENTIALS))
    return Result.success(account)


def _department_id(employee: Employee) -> int | None:
    if employee.department_id is not None:
        return employee.department_id
    if employee.department is not None:
        return employee.department.id
    return None


def employee_can_administer(employee: Employee, admin_department_id: int | None = None) -> bool:
    admin_department_id = admin_department_id or settings.ADMIN_DEPARTMENT_ID
    return _department_id(employee) == admin_department_id


def bound_employee(account: Account, gateway: Gateway | None = None) -> Employee | None:
    """The employee an account is linked to.

    An already loaded relationship wins; otherwise ``employee_id`` is looked up
    through ``gateway``, or lazily when the account is still in a session.
    """
    state = inspect(account)
    if "employee" not in state.unloaded and account.employee is not None:
        return account.employee
    if account.employee_id is None:
        return None
    if gateway is not None:
        return gateway.find_by_id(Employee, account.employee_id)
    if state.session is not None:
        return account.employee
    raise RelationshipPreconditionError(
        f"Employee {account.employee_id} of a detached account cannot be loaded without a gateway."
    )


def can_be_admin(account: Account, gateway: Gateway | None = None,
                 admin_department_id: int | None = None) -> bool:
    employee = bound_employee(account, gateway)
    if employee is None:
        return False
    return employee_can_administer(employee, admin_department_id)


def promote_to_admin(account: Account, gateway: Gateway | None = None,
                     admin_department_id: int | None = None) -> Result[Account]:
    """Grant administrator rights.

    Requires a bound employee (RelationshipPreconditionError otherwise) in the
    administrator department (AdminEligibilityError otherwise). Pass ``gateway``
    when the account is detached or only carries ``employee_id``.
    """
    try:
        employee = bound_employee(account, gateway)
    except RelationshipPreconditionError as exc:
        return Result.failure(exc)
    if employee is None:
        return Result.failure(RelationshipPreconditionError(
            "An account must be linked to an employee before it can be made an administrator."
        ))
    if not employee_can_administer(employee, admin_department_id):
        return Result.failure(AdminEligibilityError(
            "Only IT department employees can be administrators."
        ))
    account.is_admin = True
    return Result.success(account)


def require_admin(session: AccountSession) -> Account:
    if not session.is_authenticated:
        raise PermissionDeniedError("Not authenticated")
    if not session.is_admin:
        raise PermissionDeniedError("Not enough privileges")
    return session.account
