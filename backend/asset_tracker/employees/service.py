import logging

from sqlalchemy.engine import Engine

from ..auth.service import employee_can_administer
from ..core import database
from ..core.errors import AdminEligibilityError, RelationshipPreconditionError
from ..core.gateway import Gateway
from ..core.result import returns_result
from ..core.settings import settings
from ..models.Account import Account
from ..models.Department import Department
from ..models.Employee import Employee, EmployeeCreate, EmployeeUpdate
from ..models.HardwareAsset import HardwareAsset

logger = logging.getLogger(__name__)

def _require_department(gateway: Gateway, department_id: int | None) -> Department:
    if department_id is None:
        raise RelationshipPreconditionError("An employee must belong to a department.")
    return gateway.get(Department, department_id)

class EmployeeService:
    def __init__(self, engine: Engine | None = None):
        self.engine = engine or database.engine

    @returns_result
    def add(self, employee: EmployeeCreate) -> Employee:
        db_employee = Employee.build(
            first_name=employee.first_name,
            last_name=employee.last_name,
            email=employee.email,
        ).unwrap()
        if employee.department_id is None:
            raise RelationshipPreconditionError("An employee must belong to a department.")

        def write(gateway):
            department = _require_department(gateway, employee.department_id)
            db_employee.department_id = department.id
            return gateway.insert(db_employee)

        with database.unit_of_work(self.engine) as gateway:
            created = gateway.transaction(write)
        logger.info("Employee %s added to department %s", created.id, created.department_id)
        return created

    @returns_result
    def get_by_id(self, employee_id: int) -> Employee:
        with database.unit_of_work(self.engine) as gateway:
            return gateway.get(Employee, employee_id)

    @returns_result
    def get_all_for(self, department_id: int) -> list[Employee]:
        with database.unit_of_work(self.engine) as gateway:
            return gateway.query(Employee, Employee.department_id == department_id, order_by=Employee.id)

    @returns_result
    def get_all(self) -> list[Employee]:
        with database.unit_of_work(self.engine) as gateway:
            return gateway.query(Employee, order_by=Employee.id)

    @returns_result
    def update(self, employee_id: int, employee: EmployeeUpdate) -> Employee:
        changes = employee.model_dump(exclude_unset=True)
        department_changed = "department_id" in changes
        department_id = changes.pop("department_id", None)
        # Validate before opening the transaction
        Employee.clean(partial=True, **changes)

        def write(gateway):
            db_employee = gateway.get(Employee, employee_id)
            if department_changed:
                db_employee.department_id = _require_department(gateway, department_id).id
                account = gateway.first(Account, Account.employee_id == employee_id)
                if account is not None and account.is_admin and not employee_can_administer(db_employee):
                    raise AdminEligibilityError(
                        "An administrator's employee must stay in the IT department."
                    )
            db_employee.apply(**changes).unwrap()
            gateway.update(db_employee)
            return db_employee

        with database.unit_of_work(self.engine) as gateway:
            updated = gateway.transaction(write)
        logger.info("Employee %s updated", employee_id)
        return updated

    @returns_result
    def delete(self, employee_id: int) -> bool:
        """Delete an employee.

        Their hardware moves to the unassigned-asset holder and any linked
        account is unbound and loses administrator rights.
        """
        holder_id = settings.UNASSIGNED_EMPLOYEE_ID
        if employee_id == holder_id:
            raise RelationshipPreconditionError("The unassigned asset holder cannot be deleted.")

        def write(gateway):
            gateway.get(Employee, employee_id)

            hardware_assets = gateway.query(HardwareAsset, HardwareAsset.employee_id == employee_id)
            if hardware_assets:
                if gateway.find_by_id(Employee, holder_id) is None:
                    raise RelationshipPreconditionError(
                        "No unassigned asset holder exists to receive the employee's hardware."
                    )
                for hardware_asset in hardware_assets:
                    hardware_asset.employee_id = holder_id
                    gateway.update(hardware_asset)

            account = gateway.first(Account, Account.employee_id == employee_id)
            if account is not None:
                account.is_admin = False
                account.employee_id = None
                gateway.update(account)

            gateway.delete(Employee, employee_id)
            return len(hardware_assets)

        with database.unit_of_work(self.engine) as gateway:
            moved = gateway.transaction(write)
        logger.info("Employee %s deleted, %d hardware assets reassigned", employee_id, moved)
        return True
