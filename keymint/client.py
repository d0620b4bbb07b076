"""KeyMint API client: license key and customer operations.

Every operation returns a ``(response, error)`` tuple. When ``error`` is
not ``None`` the response is a default-constructed instance of the
expected type and carries no information, so always check ``error``
first:

```
client = KeyMintClient("at_...")
response, error = client.create_key(CreateKeyParams(product_id="p1"))
if error is not None:
    ...
```
"""

from __future__ import annotations

from typing import Any, Callable, Optional, Tuple, Type, TypeVar

import requests

from .config import ClientConfig
from .errors import KeyMintError
from .transport import Transport
from .types import (
    ActivateKeyParams,
    ActivateKeyResponse,
    BlockKeyParams,
    BlockKeyResponse,
    CreateCustomerParams,
    CreateCustomerResponse,
    CreateKeyParams,
    CreateKeyResponse,
    DeactivateKeyParams,
    DeactivateKeyResponse,
    DeleteCustomerParams,
    DeleteCustomerResponse,
    GetAllCustomersResponse,
    GetCustomerByIdParams,
    GetCustomerByIdResponse,
    GetCustomerWithKeysParams,
    GetCustomerWithKeysResponse,
    GetKeyParams,
    GetKeyResponse,
    ToggleCustomerStatusParams,
    ToggleCustomerStatusResponse,
    UnblockKeyParams,
    UnblockKeyResponse,
    UpdateCustomerParams,
    UpdateCustomerResponse,
)

__all__ = ["KeyMintClient", "new_client"]

R = TypeVar("R")

Result = Tuple[R, Optional[KeyMintError]]


def _call(response_type: Type[R], send: Callable[[Callable[[Any], R]], R]) -> Result[R]:
    try:
        return send(response_type.from_payload), None  # type: ignore[attr-defined]
    except KeyMintError as exc:
        return response_type(), exc


class KeyMintClient:
    """Client for the KeyMint license management API.

    Construction fails with :class:`~keymint.errors.ConfigError` when the
    access token is empty. The client keeps no mutable state besides its
    pooled HTTP session and can be shared between threads.
    """

    def __init__(
        self,
        access_token: str,
        base_url: Optional[str] = None,
        *,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.config = ClientConfig.create(access_token, base_url, timeout)
        self._transport = Transport(self.config, session=session)

    @classmethod
    def from_env(cls, session: Optional[requests.Session] = None) -> "KeyMintClient":
        config = ClientConfig.from_env()
        return cls(config.access_token, config.base_url, timeout=config.timeout, session=session)

    @property
    def base_url(self) -> str:
        return self.config.base_url

    def close(self) -> None:
        self._transport.close()

    def __enter__(self) -> "KeyMintClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"KeyMintClient(base_url={self.config.base_url!r})"

    # --- license keys ---

    def create_key(self, params: CreateKeyParams) -> Result[CreateKeyResponse]:
        """Create a license key, optionally tied to an existing or new customer."""

        return _call(
            CreateKeyResponse,
            lambda decode: self._transport.send_with_body("POST", "/key", params, decode),
        )

    def activate_key(self, params: ActivateKeyParams) -> Result[ActivateKeyResponse]:
        """Bind a license key to a device, consuming one activation slot."""

        return _call(
            ActivateKeyResponse,
            lambda decode: self._transport.send_with_body("POST", "/key/activate", params, decode),
        )

    def deactivate_key(self, params: DeactivateKeyParams) -> Result[DeactivateKeyResponse]:
        """Release one device, or every device when ``params.host_id`` is ``None``."""

        return _call(
            DeactivateKeyResponse,
            lambda decode: self._transport.send_with_body(
                "POST", "/key/deactivate", params, decode
            ),
        )

    def get_key(self, params: GetKeyParams) -> Result[GetKeyResponse]:
        return _call(
            GetKeyResponse,
            lambda decode: self._transport.send_get("/key", params.to_query(), decode),
        )

    def block_key(self, params: BlockKeyParams) -> Result[BlockKeyResponse]:
        return _call(
            BlockKeyResponse,
            lambda decode: self._transport.send_with_body("POST", "/key/block", params, decode),
        )

    def unblock_key(self, params: UnblockKeyParams) -> Result[UnblockKeyResponse]:
        return _call(
            UnblockKeyResponse,
            lambda decode: self._transport.send_with_body("POST", "/key/unblock", params, decode),
        )

    # --- customers ---

    def create_customer(self, params: CreateCustomerParams) -> Result[CreateCustomerResponse]:
        return _call(
            CreateCustomerResponse,
            lambda decode: self._transport.send_with_body("POST", "/customer", params, decode),
        )

    def get_all_customers(self) -> Result[GetAllCustomersResponse]:
        return _call(
            GetAllCustomersResponse,
            lambda decode: self._transport.send_get("/customer", None, decode),
        )

    def get_customer_with_keys(
        self, params: GetCustomerWithKeysParams
    ) -> Result[GetCustomerWithKeysResponse]:
        """Fetch a customer together with every license key it owns."""

        return _call(
            GetCustomerWithKeysResponse,
            lambda decode: self._transport.send_get("/customer/keys", params.to_query(), decode),
        )

    def update_customer(self, params: UpdateCustomerParams) -> Result[UpdateCustomerResponse]:
        """Update a customer. Fields left as ``None`` are not sent and stay unchanged."""

        return _call(
            UpdateCustomerResponse,
            lambda decode: self._transport.send_with_body(
                "PUT", "/customer/by-id", params, decode
            ),
        )

    def delete_customer(self, params: DeleteCustomerParams) -> Result[DeleteCustomerResponse]:
        """Permanently delete a customer and all of its license keys."""

        return _call(
            DeleteCustomerResponse,
            lambda decode: self._transport.send_delete(
                "/customer/by-id", params.to_query(), decode
            ),
        )

    def toggle_customer_status(
        self, params: ToggleCustomerStatusParams
    ) -> Result[ToggleCustomerStatusResponse]:
        """Flip a customer between active and disabled."""

        return _call(
            ToggleCustomerStatusResponse,
            lambda decode: self._transport.send_with_body(
                "POST", "/customer/disable", params, decode
            ),
        )

    def get_customer_by_id(self, params: GetCustomerByIdParams) -> Result[GetCustomerByIdResponse]:
        return _call(
            GetCustomerByIdResponse,
            lambda decode: self._transport.send_get("/customer/by-id", params.to_query(), decode),
        )


def new_client(
    access_token: str, base_url: str = "", *, timeout: Optional[float] = None
) -> KeyMintClient:
    """Build a :class:`KeyMintClient`; an empty ``base_url`` selects the default."""

    return KeyMintClient(access_token, base_url or None, timeout=timeout)
