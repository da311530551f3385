import logging

from sqlalchemy.engine import Engine

from ..auth import service as auth
from ..auth.session import AccountSession
from ..core import database
from ..core.errors import (
    AdminEligibilityError,
    DuplicateError,
    NotFoundError,
    RelationshipPreconditionError,
)
from ..core.gateway import Gateway
from ..core.result import Result, returns_result
from ..models.Account import Account, AccountCreate, AccountUpdate
from ..models.Department import Department
from ..models.Employee import Employee

logger = logging.getLogger(__name__)

def _check_email_free(gateway: Gateway, email: str, account_id: int | None = None):
    existing = gateway.first(Account, Account.email == email)
    if existing is not None and existing.id != account_id:
        raise DuplicateError("Email already registered")

def _check_employee_free(gateway: Gateway, employee_id: int, account_id: int | None = None) -> Employee:
    employee = gateway.get(Employee, employee_id)
    bound = gateway.first(Account, Account.employee_id == employee_id)
    if bound is not None and bound.id != account_id:
        raise DuplicateError("Employee is already linked to another account")
    return employee

class AccountService:
    def __init__(self, engine: Engine | None = None):
        self.engine = engine or database.engine

    @returns_result
    def add(self, account: AccountCreate) -> Account:
        db_account = Account.build(
            email=account.email,
            password=account.password,
            employee_id=account.employee_id,
        ).unwrap()

        def write(gateway):
            _check_email_free(gateway, db_account.email)
            if db_account.employee_id is not None:
                _check_employee_free(gateway, db_account.employee_id)
            return gateway.insert(db_account)

        with database.unit_of_work(self.engine) as gateway:
            created = gateway.transaction(write)
        logger.info("Account %s registered", created.id)
        return created

    @returns_result
    def get_by_id(self, account_id: int) -> Account:
        with database.unit_of_work(self.engine) as gateway:
            return gateway.get(Account, account_id)

    @returns_result
    def get_by_email(self, email: str) -> Account:
        with database.unit_of_work(self.engine) as gateway:
            account = gateway.first(Account, Account.email == email.strip())
            if account is None:
                raise NotFoundError("Account", email)
            return account

    @returns_result
    def get_all(self) -> list[Account]:
        with database.unit_of_work(self.engine) as gateway:
            return gateway.query(Account, order_by=Account.id)

    @returns_result
    def get_all_for(self, department_id: int, is_admin: bool | None = None) -> list[Account]:
        criteria = [Account.employee_id == Employee.id, Employee.department_id == department_id]
        if is_admin is not None:
            criteria.append(Account.is_admin == is_admin)
        with database.unit_of_work(self.engine) as gateway:
            gateway.get(Department, department_id)
            return gateway.query(Account, *criteria, order_by=Account.id)

    @returns_result
    def update(self, account_id: int, account: AccountUpdate) -> Account:
        changes = account.model_dump(exclude_unset=True)
        employee_changed = "employee_id" in changes
        employee_id = changes.pop("employee_id", None)
        # Validate (and hash a new password) before opening the transaction
        cleaned = Account.clean(partial=True, **changes)

        def write(gateway):
            db_account = gateway.get(Account, account_id)
            if "email" in cleaned:
                _check_email_free(gateway, cleaned["email"], account_id)
            if employee_changed:
                self._rebind_employee(gateway, db_account, employee_id)
            for name, value in cleaned.items():
                setattr(db_account, name, value)
            gateway.update(db_account)
            return db_account

        with database.unit_of_work(self.engine) as gateway:
            updated = gateway.transaction(write)
        logger.info("Account %s updated", account_id)
        return updated

    def _rebind_employee(self, gateway: Gateway, db_account: Account, employee_id: int | None):
        if employee_id is None:
            if db_account.is_admin:
                raise RelationshipPreconditionError(
                    "An administrator account must stay linked to an employee."
                )
            db_account.employee_id = None
            return

        employee = _check_employee_free(gateway, employee_id, db_account.id)
        if db_account.is_admin and not auth.employee_can_administer(employee):
            raise AdminEligibilityError("Only IT department employees can be administrators.")
        db_account.employee_id = employee.id

    @returns_result
    def update_password(self, email: str, password: str) -> Account:
        def write(gateway):
            db_account = gateway.first(Account, Account.email == email.strip())
            if db_account is None:
                raise NotFoundError("Account", email)
            db_account.set_password(password).unwrap()
            gateway.update(db_account)
            return db_account

        with database.unit_of_work(self.engine) as gateway:
            updated = gateway.transaction(write)
        logger.info("Password changed for account %s", updated.id)
        return updated

    @returns_result
    def delete(self, account_id: int) -> bool:
        with database.unit_of_work(self.engine) as gateway:
            gateway.transaction(lambda gw: gw.delete(Account, account_id))
        logger.info("Account %s deleted", account_id)
        return True

    @returns_result
    def promote_to_admin(self, session: AccountSession, account_id: int) -> Account:
        actor = auth.require_admin(session)

        def write(gateway):
            db_account = gateway.get(Account, account_id)
            auth.promote_to_admin(db_account, gateway).unwrap()
            gateway.update(db_account)
            return db_account

        with database.unit_of_work(self.engine) as gateway:
            promoted = gateway.transaction(write)
        logger.info("Account %s promoted to administrator by account %s", account_id, actor.id)
        return promoted

    def authenticate(self, session: AccountSession, email: str, password: str) -> Result[Account]:
        with database.unit_of_work(self.engine) as gateway:
            result = auth.authenticate(gateway, email, password)
        if result.ok:
            session.login(result.value)
            logger.info("Account %s logged in", result.value.id)
        return result

    def logout(self, session: AccountSession) -> None:
        if session.account is not None:
            logger.info("Account %s logged out", session.account.id)
        session.logout()
