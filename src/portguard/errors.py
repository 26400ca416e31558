"""统一错误类型定义。"""

from __future__ import annotations

from typing import Any


class PortGuardError(Exception):
    """portguard 基础错误类。"""

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or "UNKNOWN_ERROR"

    def to_dict(self) -> dict[str, Any]:
        """转换为字典格式。"""
        return {"error": self.message, "code": self.code}


class InvalidPortError(PortGuardError, ValueError):
    """端口号非法（非整数或不在 1-65535 范围内）。"""

    def __init__(self, port: Any, label: str = "port number") -> None:
        self.port = port
        super().__init__(f"Invalid {label}: {port!r}", "INVALID_PORT")

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["port"] = self.port
        return result


class BindError(PortGuardError):
    """操作系统拒绝绑定（端口占用、权限不足、地址无效等）。"""

    def __init__(self, port: int, host: str, cause: Exception) -> None:
        self.port = port
        self.host = host
        self.cause = cause
        self.errno = getattr(cause, "errno", None)
        reason = getattr(cause, "strerror", None) or str(cause)
        super().__init__(f"Failed to bind {host}:{port}: {reason}", "BIND_ERROR")

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result.update({"port": self.port, "host": self.host, "errno": self.errno})
        return result


class ProbeTimeoutError(PortGuardError, TimeoutError):
    """绑定探测超时。"""

    def __init__(self, port: int, host: str, timeout: float) -> None:
        self.port = port
        self.host = host
        self.timeout = timeout
        super().__init__(
            f"Port bind timeout after {timeout:g} seconds: {host}:{port}", "BIND_TIMEOUT"
        )

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result.update({"port": self.port, "host": self.host, "timeout": self.timeout})
        return result


class UnknownBindError(PortGuardError):
    """重试循环结束但没有记录到任何错误。"""

    def __init__(self, port: int, host: str) -> None:
        self.port = port
        self.host = host
        super().__init__(f"Unknown error binding {host}:{port}", "UNKNOWN_BIND_ERROR")


class PortRangeExceededError(PortGuardError):
    """扫描候选端口超过 65535。"""

    def __init__(self, port: int) -> None:
        self.port = port
        super().__init__(
            f"Port number exceeded maximum (65535): {port}", "PORT_RANGE_EXCEEDED"
        )


class NoAvailablePortError(PortGuardError):
    """扫描范围内没有可用端口。"""

    def __init__(self, start_port: int, end_port: int, host: str) -> None:
        self.start_port = start_port
        self.end_port = end_port
        self.host = host
        super().__init__(
            f"No available port found in range {start_port}-{end_port} on {host}",
            "NO_AVAILABLE_PORT",
        )

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["range"] = [self.start_port, self.end_port]
        result["host"] = self.host
        return result
