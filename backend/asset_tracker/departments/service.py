import logging

from sqlalchemy.engine import Engine

from ..auth.service import require_admin
from ..auth.session import AccountSession
from ..core import database
from ..core.errors import DuplicateError
from ..core.result import returns_result
from ..models.Department import Department, DepartmentCreate

logger = logging.getLogger(__name__)

class DepartmentService:
    def __init__(self, engine: Engine | None = None):
        self.engine = engine or database.engine

    @returns_result
    def add(self, session: AccountSession, department: DepartmentCreate) -> Department:
        """Create a new department (Admin only)."""
        require_admin(session)
        db_dept = Department.build(name=department.name).unwrap()

        def write(gateway):
            if gateway.first(Department, Department.name == db_dept.name):
                raise DuplicateError("Department with this name already exists")
            return gateway.insert(db_dept)

        with database.unit_of_work(self.engine) as gateway:
            created = gateway.transaction(write)
        logger.info("Department %s created by account %s", created.id, session.account.id)
        return created

    @returns_result
    def get_by_id(self, department_id: int) -> Department:
        with database.unit_of_work(self.engine) as gateway:
            return gateway.get(Department, department_id)

    @returns_result
    def get_all(self) -> list[Department]:
        with database.unit_of_work(self.engine) as gateway:
            return gateway.query(Department, order_by=Department.id)
