import logging

from sqlalchemy.engine import Engine

from ..auth.service import promote_to_admin
from ..models.Account import Account
from ..models.Department import Department
from ..models.Employee import Employee
from .database import unit_of_work
from .settings import settings

logger = logging.getLogger(__name__)

# Departments are static; Information Technology holds the admin department id
DEPARTMENTS = {
    1: "Finance",
    2: "Human Resources",
    3: "Sales",
    4: "Operations",
    settings.ADMIN_DEPARTMENT_ID: "Information Technology",
}

def init_db(bind: Engine | None = None):
    with unit_of_work(bind) as gateway:
        gateway.transaction(_seed)

def _seed(gateway):
    for department_id, name in DEPARTMENTS.items():
        if gateway.find_by_id(Department, department_id) is None:
            department = Department.build(name=name).unwrap()
            department.id = department_id
            gateway.insert(department)
            logger.info("Created department %s: %s", department_id, name)

    holder = gateway.find_by_id(Employee, settings.UNASSIGNED_EMPLOYEE_ID)
    if holder is None:
        holder = Employee.build(
            first_name="Unassigned",
            last_name="Assets",
            email="unassigned@assettracker.com",
        ).unwrap()
        holder.id = settings.UNASSIGNED_EMPLOYEE_ID
        holder.department_id = settings.ADMIN_DEPARTMENT_ID
        gateway.insert(holder)
        logger.info("Created unassigned asset holder employee %s", holder.id)

    if settings.ADMIN_EMAIL and settings.ADMIN_PASSWORD:
        admin = gateway.first(Account, Account.email == settings.ADMIN_EMAIL.strip())
        if admin is None:
            logger.info("Creating initial admin account: %s", settings.ADMIN_EMAIL)
            admin = Account.build(
                email=settings.ADMIN_EMAIL,
                password=settings.ADMIN_PASSWORD,
                employee_id=holder.id,
            ).unwrap()
            gateway.insert(admin)
            promote_to_admin(admin, gateway).unwrap()
            gateway.update(admin)
        else:
            logger.info("Admin account already exists.")
