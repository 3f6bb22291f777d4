"""
Command-line front end: send one SOAP request to an ONVIF device.
"""

import argparse
import dataclasses
import logging
import sys
import time
from typing import List, Optional

from colorama import Fore, Style, init as colorama_init

from .errors import OnvifSoapError, SoapFault
from .interfaces import ConfigBuilder, OutputFormatter, ToolConfig, ToolResult
from .soap import fetch_camera_time, send_request


def run_request(config: ToolConfig) -> ToolResult:
    """Send the configured request."""
    start_time = time.time()
    request = config.request
    metadata = {'xaddr': config.xaddr, 'authenticated': bool(request.username)}

    try:
        if config.sync_time:
            camera_time = fetch_camera_time(config.xaddr, timeout=config.timeout,
                                            no_debug=request.no_debug)
            request = dataclasses.replace(request, camera_time=camera_time)
            metadata['camera_time'] = camera_time.isoformat()

        tree = send_request(request, config.xaddr, timeout=config.timeout)

        return ToolResult(
            success=True,
            data=tree.to_dict(),
            errors=[],
            metadata=metadata,
            execution_time=time.time() - start_time
        )

    except SoapFault as e:
        metadata['fault_code'] = e.code
        metadata['fault_type'] = e.fault_type
        return ToolResult(
            success=False,
            data=None,
            errors=[f"SOAP fault: {e}"],
            metadata=metadata,
            execution_time=time.time() - start_time
        )
    except OnvifSoapError as e:
        metadata['error_type'] = type(e).__name__
        return ToolResult(
            success=False,
            data=None,
            errors=[str(e)],
            metadata=metadata,
            execution_time=time.time() - start_time
        )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='onvifsoap',
        description='Send an authenticated SOAP request to an ONVIF device',
    )
    parser.add_argument('xaddr', help='Device service address, e.g. http://192.168.1.10/onvif/device_service')
    body = parser.add_mutually_exclusive_group(required=True)
    body.add_argument('--body', help='XML fragment placed inside the SOAP Body')
    body.add_argument('--body-file', help='File holding the XML fragment for the SOAP Body')
    parser.add_argument('--namespace', action='append',
                        help='Extra namespace declaration for the Envelope, e.g. xmlns:tds="..." (repeatable)')
    parser.add_argument('-u', '--username', help='Username for Digest and WS-Security authentication')
    parser.add_argument('-p', '--password', help='Password')
    parser.add_argument('--action', help='WS-Addressing Action URI')
    parser.add_argument('--token-age', type=float, default=0.0,
                        help='Seconds added to the UsernameToken Created time (may be negative)')
    clock = parser.add_mutually_exclusive_group()
    clock.add_argument('--camera-time', help='Camera clock (ISO-8601) used as the Created time anchor')
    clock.add_argument('--sync-time', action='store_true',
                       help='Read the camera clock with GetSystemDateAndTime before sending')
    parser.add_argument('--timeout', type=float, default=5.0, help='Request timeout in seconds (default: 5.0)')
    parser.add_argument('--format', choices=['text', 'json', 'quiet'], default='text', help='Output format')
    parser.add_argument('-v', '--verbose', action='store_true', help='Log request and response bodies')
    parser.add_argument('--no-debug', action='store_true', help='Never log request and response bodies')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    colorama_init()

    try:
        config = ConfigBuilder.from_args(args)
    except (OSError, ValueError) as e:
        print(f"{Fore.RED}Invalid arguments: {e}{Style.RESET_ALL}", file=sys.stderr)
        return 2

    logging.basicConfig(
        level=logging.DEBUG if config.verbose else logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    )

    result = run_request(config)
    output = OutputFormatter().format_result(result, config.output_format)

    if config.output_format == 'text':
        color = Fore.GREEN if result.success else Fore.RED
        first, _, rest = output.partition("\n")
        output = f"{color}{first}{Style.RESET_ALL}" + (f"\n{rest}" if rest else "")
    if output:
        print(output)

    return 0 if result.success else 1


if __name__ == '__main__':
    sys.exit(main())
