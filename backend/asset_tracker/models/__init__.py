from .Department import Department, DepartmentCreate
from .Employee import Employee, EmployeeCreate, EmployeeUpdate
from .Account import Account, AccountCreate, AccountUpdate
from .SoftwareAsset import SoftwareAsset, SoftwareAssetCreate, SoftwareAssetUpdate, Vulnerability
from .HardwareAsset import HardwareAsset, HardwareAssetCreate, HardwareAssetUpdate

__all__ = [
    "Department", "DepartmentCreate",
    "Employee", "EmployeeCreate", "EmployeeUpdate",
    "Account", "AccountCreate", "AccountUpdate",
    "SoftwareAsset", "SoftwareAssetCreate", "SoftwareAssetUpdate", "Vulnerability",
    "HardwareAsset", "HardwareAssetCreate", "HardwareAssetUpdate",
]
