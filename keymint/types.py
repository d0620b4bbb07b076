"""Request parameter and response schemas for the KeyMint API.

Parameter classes serialize to the camelCase wire format with
``to_payload``. Optional fields set to ``None`` are left out of the payload
entirely; an empty string is a real value and is sent as-is.

Response classes are built with ``from_payload``. Missing keys and JSON
``null`` keep the field default, while a value of the wrong JSON type
raises ``ValueError``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Type, TypeVar

__all__ = [
    "NewCustomer",
    "CreateKeyParams",
    "CreateKeyResponse",
    "ActivateKeyParams",
    "ActivateKeyResponse",
    "DeactivateKeyParams",
    "DeactivateKeyResponse",
    "DeviceDetails",
    "LicenseDetails",
    "CustomerDetails",
    "GetKeyParams",
    "GetKeyData",
    "GetKeyResponse",
    "BlockKeyParams",
    "BlockKeyResponse",
    "UnblockKeyParams",
    "UnblockKeyResponse",
    "CreateCustomerParams",
    "CreatedCustomer",
    "CreateCustomerResponse",
    "Customer",
    "GetAllCustomersResponse",
    "GetCustomerWithKeysParams",
    "CustomerLicenseKey",
    "CustomerWithKeys",
    "GetCustomerWithKeysResponse",
    "UpdateCustomerParams",
    "UpdateCustomerResponse",
    "ToggleCustomerStatusParams",
    "ToggleCustomerStatusResponse",
    "GetCustomerByIdParams",
    "GetCustomerByIdResponse",
    "DeleteCustomerParams",
    "DeleteCustomerResponse",
    "ErrorBody",
]

T = TypeVar("T")


# --- decoding helpers ---

_INT64_MIN = -(2 ** 63)
_INT64_MAX = 2 ** 63 - 1


def _expect_object(payload: Any, name: str) -> Dict[str, Any]:
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise ValueError(f"expected a JSON object for {name}, got {type(payload).__name__}")
    return payload


def _lookup(payload: Dict[str, Any], key: str) -> Any:
    """Return the value stored under ``key``, ignoring case.

    When several keys match, the last one in document order wins.
    """

    folded = key.casefold()
    value = None
    for name, candidate in payload.items():
        if name == key or name.casefold() == folded:
            value = candidate
    return value


def _check(payload: Dict[str, Any], key: str, kind: type, label: str) -> Any:
    value = _lookup(payload, key)
    if value is None:
        return None
    # bool is a subclass of int but never a valid JSON number here.
    if isinstance(value, bool) and kind is not bool:
        raise ValueError(f"field '{key}' must be {label}, got bool")
    if not isinstance(value, kind):
        raise ValueError(f"field '{key}' must be {label}, got {type(value).__name__}")
    if kind is int and not _INT64_MIN <= value <= _INT64_MAX:
        raise ValueError(f"field '{key}' overflows a 64-bit integer: {value}")
    return value


def _string(payload: Dict[str, Any], key: str) -> str:
    value = _check(payload, key, str, "a string")
    return "" if value is None else value


def _optional_string(payload: Dict[str, Any], key: str) -> Optional[str]:
    return _check(payload, key, str, "a string")


def _integer(payload: Dict[str, Any], key: str) -> int:
    value = _check(payload, key, int, "an integer")
    return 0 if value is None else value


def _optional_integer(payload: Dict[str, Any], key: str) -> Optional[int]:
    return _check(payload, key, int, "an integer")


def _boolean(payload: Dict[str, Any], key: str) -> bool:
    value = _check(payload, key, bool, "a boolean")
    return False if value is None else value


def _nested(payload: Dict[str, Any], key: str, cls: Type[T]) -> T:
    return cls.from_payload(_lookup(payload, key))  # type: ignore[attr-defined]


def _optional_nested(payload: Dict[str, Any], key: str, cls: Type[T]) -> Optional[T]:
    value = _lookup(payload, key)
    if value is None:
        return None
    return cls.from_payload(value)  # type: ignore[attr-defined]


def _nested_list(payload: Dict[str, Any], key: str, cls: Type[T]) -> List[T]:
    items = _check(payload, key, list, "an array")
    if items is None:
        return []
    return [cls.from_payload(item) for item in items]  # type: ignore[attr-defined]


def _compact(payload: Dict[str, Any]) -> Dict[str, Any]:
    """Drop the keys whose value is ``None``."""

    return {key: value for key, value in payload.items() if value is not None}


# --- license keys ---


@dataclass(frozen=True)
class NewCustomer:
    """Customer created on the fly together with a new license key."""

    name: str
    email: Optional[str] = None

    def to_payload(self) -> Dict[str, Any]:
        return _compact({"name": self.name, "email": self.email})


@dataclass(frozen=True)
class CreateKeyParams:
    product_id: str
    max_activations: Optional[str] = None
    expiry_date: Optional[str] = None
    customer_id: Optional[str] = None
    new_customer: Optional[NewCustomer] = None

    def to_payload(self) -> Dict[str, Any]:
        return _compact(
            {
                "productId": self.product_id,
                "maxActivations": self.max_activations,
                "expiryDate": self.expiry_date,
                "customerId": self.customer_id,
                "newCustomer": (
                    self.new_customer.to_payload() if self.new_customer is not None else None
                ),
            }
        )


@dataclass(frozen=True)
class CreateKeyResponse:
    code: int = 0
    key: str = ""

    @classmethod
    def from_payload(cls, payload: Any) -> "CreateKeyResponse":
        payload = _expect_object(payload, cls.__name__)
        return cls(code=_integer(payload, "code"), key=_string(payload, "key"))


@dataclass(frozen=True)
class ActivateKeyParams:
    product_id: str
    license_key: str
    host_id: Optional[str] = None
    device_tag: Optional[str] = None

    def to_payload(self) -> Dict[str, Any]:
        return _compact(
            {
                "productId": self.product_id,
                "licenseKey": self.license_key,
                "hostId": self.host_id,
                "deviceTag": self.device_tag,
            }
        )


@dataclass(frozen=True)
class ActivateKeyResponse:
    code: int = 0
    message: str = ""
    licensee_name: Optional[str] = None
    licensee_email: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: Any) -> "ActivateKeyResponse":
        payload = _expect_object(payload, cls.__name__)
        return cls(
            code=_integer(payload, "code"),
            message=_string(payload, "message"),
            licensee_name=_optional_string(payload, "licenseeName"),
            licensee_email=_optional_string(payload, "licenseeEmail"),
        )


@dataclass(frozen=True)
class DeactivateKeyParams:
    """Leaving ``host_id`` unset deactivates every device bound to the key."""

    product_id: str
    license_key: str
    host_id: Optional[str] = None

    def to_payload(self) -> Dict[str, Any]:
        return _compact(
            {
                "productId": self.product_id,
                "licenseKey": self.license_key,
                "hostId": self.host_id,
            }
        )


@dataclass(frozen=True)
class _MessageResponse:
    message: str = ""
    code: int = 0

    @classmethod
    def from_payload(cls, payload: Any):
        payload = _expect_object(payload, cls.__name__)
        return cls(message=_string(payload, "message"), code=_integer(payload, "code"))


@dataclass(frozen=True)
class DeactivateKeyResponse(_MessageResponse):
    pass


@dataclass(frozen=True)
class DeviceDetails:
    host_id: str = ""
    device_tag: Optional[str] = None
    ip_address: Optional[str] = None
    activation_time: str = ""

    @classmethod
    def from_payload(cls, payload: Any) -> "DeviceDetails":
        payload = _expect_object(payload, cls.__name__)
        return cls(
            host_id=_string(payload, "hostId"),
            device_tag=_optional_string(payload, "deviceTag"),
            ip_address=_optional_string(payload, "ipAddress"),
            activation_time=_string(payload, "activationTime"),
        )


@dataclass(frozen=True)
class LicenseDetails:
    id: str = ""
    key: str = ""
    product_id: str = ""
    max_activations: int = 0
    activations: int = 0
    devices: List[DeviceDetails] = field(default_factory=list)
    activated: bool = False
    expiration_date: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: Any) -> "LicenseDetails":
        payload = _expect_object(payload, cls.__name__)
        return cls(
            id=_string(payload, "id"),
            key=_string(payload, "key"),
            product_id=_string(payload, "productId"),
            max_activations=_integer(payload, "maxActivations"),
            activations=_integer(payload, "activations"),
            devices=_nested_list(payload, "devices", DeviceDetails),
            activated=_boolean(payload, "activated"),
            expiration_date=_optional_string(payload, "expirationDate"),
        )


@dataclass(frozen=True)
class CustomerDetails:
    id: str = ""
    name: Optional[str] = None
    email: Optional[str] = None
    active: bool = False

    @classmethod
    def from_payload(cls, payload: Any) -> "CustomerDetails":
        payload = _expect_object(payload, cls.__name__)
        return cls(
            id=_string(payload, "id"),
            name=_optional_string(payload, "name"),
            email=_optional_string(payload, "email"),
            active=_boolean(payload, "active"),
        )


@dataclass(frozen=True)
class GetKeyParams:
    product_id: str
    license_key: str

    def to_query(self) -> Dict[str, str]:
        return {"productId": self.product_id, "licenseKey": self.license_key}


@dataclass(frozen=True)
class GetKeyData:
    license: LicenseDetails = field(default_factory=LicenseDetails)
    customer: Optional[CustomerDetails] = None

    @classmethod
    def from_payload(cls, payload: Any) -> "GetKeyData":
        payload = _expect_object(payload, cls.__name__)
        return cls(
            license=_nested(payload, "license", LicenseDetails),
            customer=_optional_nested(payload, "customer", CustomerDetails),
        )


@dataclass(frozen=True)
class GetKeyResponse:
    code: int = 0
    data: GetKeyData = field(default_factory=GetKeyData)

    @classmethod
    def from_payload(cls, payload: Any) -> "GetKeyResponse":
        payload = _expect_object(payload, cls.__name__)
        return cls(code=_integer(payload, "code"), data=_nested(payload, "data", GetKeyData))


@dataclass(frozen=True)
class BlockKeyParams:
    product_id: str
    license_key: str

    def to_payload(self) -> Dict[str, Any]:
        return {"productId": self.product_id, "licenseKey": self.license_key}


@dataclass(frozen=True)
class BlockKeyResponse(_MessageResponse):
    pass


@dataclass(frozen=True)
class UnblockKeyParams:
    product_id: str
    license_key: str

    def to_payload(self) -> Dict[str, Any]:
        return {"productId": self.product_id, "licenseKey": self.license_key}


@dataclass(frozen=True)
class UnblockKeyResponse(_MessageResponse):
    pass


# --- customers ---


@dataclass(frozen=True)
class CreateCustomerParams:
    name: str
    email: str

    def to_payload(self) -> Dict[str, Any]:
        return {"name": self.name, "email": self.email}


@dataclass(frozen=True)
class CreatedCustomer:
    id: str = ""
    name: str = ""
    email: str = ""

    @classmethod
    def from_payload(cls, payload: Any) -> "CreatedCustomer":
        payload = _expect_object(payload, cls.__name__)
        return cls(
            id=_string(payload, "id"),
            name=_string(payload, "name"),
            email=_string(payload, "email"),
        )


@dataclass(frozen=True)
class CreateCustomerResponse:
    id: str = ""
    action: str = ""
    status: bool = False
    message: str = ""
    data: CreatedCustomer = field(default_factory=CreatedCustomer)
    code: int = 0

    @classmethod
    def from_payload(cls, payload: Any) -> "CreateCustomerResponse":
        payload = _expect_object(payload, cls.__name__)
        return cls(
            id=_string(payload, "id"),
            action=_string(payload, "action"),
            status=_boolean(payload, "status"),
            message=_string(payload, "message"),
            data=_nested(payload, "data", CreatedCustomer),
            code=_integer(payload, "code"),
        )


@dataclass(frozen=True)
class Customer:
    id: str = ""
    name: str = ""
    email: str = ""
    active: bool = False
    created_at: str = ""
    updated_at: str = ""
    created_by: str = ""

    @classmethod
    def from_payload(cls, payload: Any) -> "Customer":
        payload = _expect_object(payload, cls.__name__)
        return cls(
            id=_string(payload, "id"),
            name=_string(payload, "name"),
            email=_string(payload, "email"),
            active=_boolean(payload, "active"),
            created_at=_string(payload, "createdAt"),
            updated_at=_string(payload, "updatedAt"),
            created_by=_string(payload, "createdBy"),
        )


@dataclass(frozen=True)
class GetAllCustomersResponse:
    action: str = ""
    status: bool = False
    data: List[Customer] = field(default_factory=list)
    code: int = 0

    @classmethod
    def from_payload(cls, payload: Any) -> "GetAllCustomersResponse":
        payload = _expect_object(payload, cls.__name__)
        return cls(
            action=_string(payload, "action"),
            status=_boolean(payload, "status"),
            data=_nested_list(payload, "data", Customer),
            code=_integer(payload, "code"),
        )


@dataclass(frozen=True)
class GetCustomerWithKeysParams:
    customer_id: str

    def to_query(self) -> Dict[str, str]:
        return {"customerId": self.customer_id}


@dataclass(frozen=True)
class CustomerLicenseKey:
    id: str = ""
    key: str = ""
    product_id: str = ""
    max_activations: int = 0
    activations: int = 0
    activated: bool = False
    expiration_date: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: Any) -> "CustomerLicenseKey":
        payload = _expect_object(payload, cls.__name__)
        return cls(
            id=_string(payload, "id"),
            key=_string(payload, "key"),
            product_id=_string(payload, "productId"),
            max_activations=_integer(payload, "maxActivations"),
            activations=_integer(payload, "activations"),
            activated=_boolean(payload, "activated"),
            expiration_date=_optional_string(payload, "expirationDate"),
        )


@dataclass(frozen=True)
class CustomerWithKeys:
    customer: Customer = field(default_factory=Customer)
    license_keys: List[CustomerLicenseKey] = field(default_factory=list)

    @classmethod
    def from_payload(cls, payload: Any) -> "CustomerWithKeys":
        payload = _expect_object(payload, cls.__name__)
        return cls(
            customer=_nested(payload, "customer", Customer),
            license_keys=_nested_list(payload, "licenseKeys", CustomerLicenseKey),
        )


@dataclass(frozen=True)
class GetCustomerWithKeysResponse:
    action: str = ""
    status: bool = False
    data: CustomerWithKeys = field(default_factory=CustomerWithKeys)
    code: int = 0

    @classmethod
    def from_payload(cls, payload: Any) -> "GetCustomerWithKeysResponse":
        payload = _expect_object(payload, cls.__name__)
        return cls(
            action=_string(payload, "action"),
            status=_boolean(payload, "status"),
            data=_nested(payload, "data", CustomerWithKeys),
            code=_integer(payload, "code"),
        )


@dataclass(frozen=True)
class UpdateCustomerParams:
    customer_id: str
    name: Optional[str] = None
    email: Optional[str] = None
    active: Optional[bool] = None

    def to_payload(self) -> Dict[str, Any]:
        return _compact(
            {
                "customerId": self.customer_id,
                "name": self.name,
                "email": self.email,
                "active": self.active,
            }
        )


@dataclass(frozen=True)
class UpdateCustomerResponse:
    action: str = ""
    status: bool = False
    message: str = ""
    data: Customer = field(default_factory=Customer)
    code: int = 0

    @classmethod
    def from_payload(cls, payload: Any) -> "UpdateCustomerResponse":
        payload = _expect_object(payload, cls.__name__)
        return cls(
            action=_string(payload, "action"),
            status=_boolean(payload, "status"),
            message=_string(payload, "message"),
            data=_nested(payload, "data", Customer),
            code=_integer(payload, "code"),
        )


@dataclass(frozen=True)
class _ActionResponse:
    action: str = ""
    status: bool = False
    message: str = ""
    code: int = 0

    @classmethod
    def from_payload(cls, payload: Any):
        payload = _expect_object(payload, cls.__name__)
        return cls(
            action=_string(payload, "action"),
            status=_boolean(payload, "status"),
            message=_string(payload, "message"),
            code=_integer(payload, "code"),
        )


@dataclass(frozen=True)
class ToggleCustomerStatusParams:
    customer_id: str

    def to_payload(self) -> Dict[str, Any]:
        return {"customerId": self.customer_id}


@dataclass(frozen=True)
class ToggleCustomerStatusResponse(_ActionResponse):
    pass


@dataclass(frozen=True)
class GetCustomerByIdParams:
    customer_id: str

    def to_query(self) -> Dict[str, str]:
        return {"customerId": self.customer_id}


@dataclass(frozen=True)
class GetCustomerByIdResponse:
    """``data`` is a list holding the single matching customer."""

    action: str = ""
    status: bool = False
    data: List[Customer] = field(default_factory=list)
    code: int = 0

    @classmethod
    def from_payload(cls, payload: Any) -> "GetCustomerByIdResponse":
        payload = _expect_object(payload, cls.__name__)
        return cls(
            action=_string(payload, "action"),
            status=_boolean(payload, "status"),
            data=_nested_list(payload, "data", Customer),
            code=_integer(payload, "code"),
        )


@dataclass(frozen=True)
class DeleteCustomerParams:
    """Deleting a customer also removes every license key it owns."""

    customer_id: str

    def to_query(self) -> Dict[str, str]:
        return {"customerId": self.customer_id}


@dataclass(frozen=True)
class DeleteCustomerResponse(_ActionResponse):
    pass


# --- errors ---


@dataclass(frozen=True)
class ErrorBody:
    """Error document sent by the API alongside a 4xx or 5xx status."""

    message: str = ""
    code: int = 0
    status: Optional[int] = None

    @classmethod
    def from_payload(cls, payload: Any) -> "ErrorBody":
        payload = _expect_object(payload, cls.__name__)
        return cls(
            message=_string(payload, "message"),
            code=_integer(payload, "code"),
            status=_optional_integer(payload, "status"),
        )
