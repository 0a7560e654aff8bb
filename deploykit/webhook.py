from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

import requests

from deploykit.errors import DeployError

DEFAULT_TIMEOUT = 30


@dataclass(frozen=True)
class DeployRequest:
    name: str
    port: int
    image: str
    token: str
    image_port: int = 80

    def form(self) -> List[Tuple[str, str]]:
        """Form fields in the order the deploy endpoint documents them."""
        return [
            ("name", self.name),
            ("port", str(self.port)),
            ("image", self.image),
            ("token", self.token),
            ("image_port", str(self.image_port)),
        ]

    def masked_form(self) -> List[Tuple[str, str]]:
        return [(k, "***" if k == "token" and v else v) for k, v in self.form()]


def trigger_deploy(
    endpoint: str,
    request: DeployRequest,
    session: Optional[requests.Session] = None,
    timeout: float = DEFAULT_TIMEOUT,
    fail_on_status: bool = False,
) -> requests.Response:
    """
    POST the deploy form to the endpoint, once.

    Only transport failures raise by default; the response status is returned
    to the caller. With fail_on_status=True, a 4xx/5xx answer raises too.
    There is no retry.
    """
    http = session or requests.Session()
    try:
        response = http.post(endpoint, data=request.form(), timeout=timeout)
    except requests.RequestException as e:
        raise DeployError(f"Deploy request to {endpoint} failed: {e}") from e
    finally:
        if session is None:
            http.close()

    if fail_on_status and response.status_code >= 400:
        raise DeployError(
            f"Deploy endpoint {endpoint} answered HTTP {response.status_code}: "
            f"{response.text.strip()[:200]}"
        )
    return response
