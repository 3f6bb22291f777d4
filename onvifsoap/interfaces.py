"""
Common data structures and output formatting for the ONVIF SOAP client.
"""

from dataclasses import dataclass, field, asdict
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional, Sequence
import json


@dataclass(frozen=True)
class SoapRequest:
    """
    Everything needed to build and send one SOAP request.

    The same instance may be sent any number of times, from any thread: the
    nonce and timestamp are generated fresh on every send.
    """
    body: str
    namespaces: Sequence[str] = ()
    username: str = ''
    password: str = ''
    token_age: timedelta = timedelta(0)
    action: str = ''
    no_debug: bool = False
    # Cameras with Replay Attack Protection (e.g. Axis) reject messages whose
    # Created time is more than ~10 seconds away from their own clock.
    camera_time: Optional[datetime] = None

    def __post_init__(self):
        object.__setattr__(self, 'namespaces', tuple(self.namespaces))


@dataclass
class ToolConfig:
    """Configuration for running a tool."""
    xaddr: str
    request: SoapRequest
    output_format: str = 'text'  # 'text', 'json', 'quiet'
    verbose: bool = False
    timeout: Optional[float] = None
    sync_time: bool = False


@dataclass
class ToolResult:
    """Standardized result structure from tool execution."""
    success: bool
    data: Any = None
    errors: List[str] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)
    execution_time: float = 0.0


class OutputFormatter:
    """Handles formatting tool results for different output formats."""

    def format_result(self, result: ToolResult, format_type: str) -> str:
        """Format a ToolResult according to the specified format."""
        if format_type == 'json':
            return self._format_json(result)
        elif format_type == 'text':
            return self._format_text(result)
        elif format_type == 'quiet':
            return self._format_quiet(result)
        else:
            raise ValueError(f"Unknown format type: {format_type}")

    def _format_json(self, result: ToolResult) -> str:
        """Format result as JSON."""
        return json.dumps(asdict(result), indent=2, default=str)

    def _format_text(self, result: ToolResult) -> str:
        """Format result as human-readable text."""
        lines = []
        if result.success:
            lines.append("SUCCESS: Request completed")
        else:
            lines.append("FAILED: Request failed")

        if result.errors:
            lines.append("Errors:")
            for error in result.errors:
                lines.append(f"  - {error}")

        if result.metadata:
            lines.append("Metadata:")
            for key, value in result.metadata.items():
                lines.append(f"  {key}: {value}")

        if result.success and result.data is not None:
            lines.append("Response:")
            lines.append(json.dumps(result.data, indent=2, default=str))

        if result.execution_time > 0:
            lines.append(f"Execution time: {result.execution_time:.2f}s")

        return "\n".join(lines)

    def _format_quiet(self, result: ToolResult) -> str:
        """Format result for quiet mode (minimal output)."""
        return "" if result.success else "\n".join(result.errors)


class ConfigBuilder:
    """Helper class to build ToolConfig from parsed command-line arguments."""

    @staticmethod
    def from_args(args) -> ToolConfig:
        """Create ToolConfig from argparse args."""
        body = args.body
        if args.body_file:
            with open(args.body_file, encoding='utf-8') as f:
                body = f.read()

        camera_time = None
        if args.camera_time:
            camera_time = datetime.fromisoformat(args.camera_time.replace('Z', '+00:00'))

        request = SoapRequest(
            body=body or '',
            namespaces=args.namespace or (),
            username=args.username or '',
            password=args.password or '',
            token_age=timedelta(seconds=args.token_age),
            action=args.action or '',
            no_debug=args.no_debug,
            camera_time=camera_time,
        )

        return ToolConfig(
            xaddr=args.xaddr,
            request=request,
            output_format=args.format,
            verbose=args.verbose,
            timeout=args.timeout,
            sync_time=args.sync_time,
        )
