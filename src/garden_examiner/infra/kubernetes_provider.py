"""Kubernetes-client backed :class:`~garden_examiner.core.protocols.GardenProvider`.

This module is the **only** place in the codebase that imports the
``kubernetes`` package.  All client exceptions are caught here and
re-raised as typed :class:`~garden_examiner.exceptions.GexError`
subclasses; nothing raw escapes the infrastructure boundary.
"""

from __future__ import annotations

import base64
import binascii
import logging
from pathlib import Path
from typing import Any

from garden_examiner.exceptions import EnvironmentError, FetchError, NotFoundError

logger = logging.getLogger(__name__)

GARDENER_GROUP: str = "core.gardener.cloud"
GARDENER_VERSION: str = "v1beta1"

NAMESPACED_KINDS: frozenset[str] = frozenset({"shoots"})
CLUSTER_KINDS: frozenset[str] = frozenset({"seeds", "cloudprofiles", "projects"})


def _load_kubernetes() -> Any:
    """Import the kubernetes package lazily."""
    try:
        import kubernetes
        import kubernetes.client
        import kubernetes.config
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "kubernetes is not installed. Install with: pip install kubernetes",
        ) from exc
    return kubernetes


def _is_api_exception(exc: Exception, status: int | None = None) -> bool:
    kubernetes = _load_kubernetes()
    if not isinstance(exc, kubernetes.client.ApiException):
        return False
    return status is None or exc.status == status


class KubernetesGardenProvider:
    """Concrete :class:`GardenProvider` backed by the kubernetes Python client.

    Usage::

        provider = KubernetesGardenProvider(Path("~/.garden/kubeconfig"))
        shoots = provider.list_objects("shoots")

    Parameters
    ----------
    kubeconfig:
        Path to the garden cluster kubeconfig.
    api_client:
        Pre-built ``kubernetes.client.ApiClient``; when given, *kubeconfig*
        is not read.
    custom_api, core_api:
        Pre-built ``CustomObjectsApi`` / ``CoreV1Api`` instances.
    """

    def __init__(
        self,
        kubeconfig: Path | None = None,
        *,
        api_client: Any = None,
        custom_api: Any = None,
        core_api: Any = None,
    ) -> None:
        self._kubeconfig: Path | None = kubeconfig
        self._api_client: Any = api_client
        self._custom: Any = custom_api
        self._core: Any = core_api

    # ------------------------------------------------------------------
    # Client construction
    # ------------------------------------------------------------------

    def _client(self) -> Any:
        if self._api_client is None:
            kubernetes = _load_kubernetes()
            config_file = str(self._kubeconfig) if self._kubeconfig else None
            logger.debug("loading garden kubeconfig %s", config_file)
            try:
                self._api_client = kubernetes.config.new_client_from_config(
                    config_file=config_file,
                )
            except Exception as exc:
                raise FetchError(
                    f"Cannot load garden kubeconfig {config_file}: {exc}",
                    hint="Check that the kubeconfig points to the garden cluster.",
                ) from exc
        return self._api_client

    def _custom_api(self) -> Any:
        if self._custom is None:
            kubernetes = _load_kubernetes()
            self._custom = kubernetes.client.CustomObjectsApi(self._client())
        return self._custom

    def _core_api(self) -> Any:
        if self._core is None:
            kubernetes = _load_kubernetes()
            self._core = kubernetes.client.CoreV1Api(self._client())
        return self._core

    # ------------------------------------------------------------------
    # Protocol methods
    # ------------------------------------------------------------------

    def list_objects(self, kind: str) -> list[dict[str, Any]]:
        """List all objects of *kind* across the garden cluster.

        Raises
        ------
        FetchError
            For any API or transport failure.
        """
        self._check_kind(kind)
        api = self._custom_api()
        logger.debug("listing %s", kind)
        try:
            result = api.list_cluster_custom_object(
                GARDENER_GROUP, GARDENER_VERSION, kind,
            )
        except Exception as exc:
            raise self._fetch_error(f"Failed to list {kind}", exc) from exc
        items = result.get("items") if isinstance(result, dict) else None
        return [item for item in items or [] if isinstance(item, dict)]

    def get_object(
        self,
        kind: str,
        name: str,
        namespace: str | None = None,
    ) -> dict[str, Any] | None:
        """Fetch one object; ``None`` when the API answers 404.

        Raises
        ------
        FetchError
            For any other API or transport failure.
        """
        self._check_kind(kind)
        api = self._custom_api()
        where = f"{namespace}/{name}" if namespace else name
        logger.debug("reading %s %s", kind, where)
        try:
            if kind in NAMESPACED_KINDS:
                result = api.get_namespaced_custom_object(
                    GARDENER_GROUP, GARDENER_VERSION, namespace, kind, name,
                )
            else:
                result = api.get_cluster_custom_object(
                    GARDENER_GROUP, GARDENER_VERSION, kind, name,
                )
        except Exception as exc:
            if _is_api_exception(exc, 404):
                return None
            raise self._fetch_error(f"Failed to read {kind} {where}", exc) from exc
        return dict(result) if isinstance(result, dict) else None

    def read_secret(self, namespace: str, name: str) -> dict[str, str]:
        """Return the base64-decoded data of a secret.

        Raises
        ------
        NotFoundError
            When the secret does not exist.
        FetchError
            For any other API failure or undecodable data.
        """
        api = self._core_api()
        logger.debug("reading secret %s/%s", namespace, name)
        try:
            secret = api.read_namespaced_secret(name, namespace)
        except Exception as exc:
            if _is_api_exception(exc, 404):
                raise NotFoundError(f"{namespace}/{name}", source="provider") from exc
            raise self._fetch_error(f"Failed to read secret {namespace}/{name}", exc) from exc

        decoded: dict[str, str] = {}
        for key, value in (secret.data or {}).items():
            try:
                decoded[key] = base64.b64decode(value).decode("utf-8")
            except (binascii.Error, UnicodeDecodeError) as exc:
                raise FetchError(
                    f"Secret {namespace}/{name} has undecodable key '{key}'",
                ) from exc
        return decoded

    # ------------------------------------------------------------------
    # Exception mapping
    # ------------------------------------------------------------------

    @staticmethod
    def _check_kind(kind: str) -> None:
        if kind not in NAMESPACED_KINDS and kind not in CLUSTER_KINDS:
            raise FetchError(f"Unsupported garden resource kind '{kind}'")

    @staticmethod
    def _fetch_error(message: str, exc: Exception) -> FetchError:
        """Translate a client exception into a :class:`FetchError`."""
        if _is_api_exception(exc):
            status = getattr(exc, "status", None)
            reason = getattr(exc, "reason", None) or str(exc)
            hint = None
            if status in (401, 403):
                hint = "The garden kubeconfig lacks permission for this resource."
            return FetchError(f"{message}: {status} {reason}", hint=hint)
        return FetchError(f"{message}: {exc}")
