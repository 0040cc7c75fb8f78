"""Error taxonomy for roleplay sessions.

Session-start errors block the session from starting. Backend errors raised
while exchanging messages are classified into a ``BackendErrorKind`` and shown
to the trainee as a single system bubble; the session carries on.
"""

from __future__ import annotations

from enum import Enum


class RoleplayError(Exception):
    """Base class for all errors raised by this library."""


class SessionStartError(RoleplayError):
    """A session could not be started. Nothing was created."""


class NoActiveScenariosError(SessionStartError):
    def __init__(self) -> None:
        super().__init__("Harap aktifkan minimal satu skenario di pengaturan.")


class NoPersonaTypesError(SessionStartError):
    def __init__(self) -> None:
        super().__init__("Harap tambahkan minimal satu tipe konsumen di pengaturan.")


class MissingCredentialError(SessionStartError):
    """The dialogue backend has no credential to start a chat with."""

    def __init__(self, detail: str = "API key is missing") -> None:
        super().__init__(f"Gagal memulai simulasi: {detail}")
        self.detail = detail


class BackendErrorKind(str, Enum):
    INVALID_CREDENTIAL = "invalid_credential"
    QUOTA_EXCEEDED = "quota_exceeded"
    SERVICE_OVERLOADED = "service_overloaded"
    UNKNOWN = "unknown"


class BackendError(RoleplayError):
    """A classified failure of the dialogue backend's message exchange."""

    def __init__(self, kind: BackendErrorKind, detail: str = "") -> None:
        super().__init__(f"{kind.value}: {detail}" if detail else kind.value)
        self.kind = kind
        self.detail = detail


_BACKEND_ERROR_NOTICES: dict[BackendErrorKind, str] = {
    BackendErrorKind.INVALID_CREDENTIAL: "Kunci API tidak valid. Periksa konfigurasi sistem.",
    BackendErrorKind.QUOTA_EXCEEDED: (
        "⚠️ Kuota API terlampaui (Error 429). Batas penggunaan telah habis. "
        "Mohon tunggu beberapa saat sebelum mengirim pesan lagi."
    ),
    BackendErrorKind.SERVICE_OVERLOADED: "⚠️ Server AI sedang sibuk. Mohon kirim ulang pesan Anda.",
    BackendErrorKind.UNKNOWN: "Maaf, terjadi gangguan koneksi ke AI. Silakan coba lagi.",
}


def describe_backend_error(kind: BackendErrorKind) -> str:
    """User-safe notice for a classified backend failure."""
    return _BACKEND_ERROR_NOTICES[kind]
