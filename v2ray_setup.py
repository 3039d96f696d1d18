#!/usr/bin/env python3
"""
V2ray Auto Setup Utility
------------------------

Installs and configures the V2ray proxy service on a Linux host in one
unattended pass (apart from the optional rollback prompt on failure).

Features:
  • Installs V2ray through the vendor installer when the binary is missing
  • Patches the systemd unit with V2RAY_VMESS_AEAD_FORCED=false (backup first)
  • Reloads, restarts, verifies and enables the v2ray service
  • Enables BBR congestion control and opens the V2ray port in UFW
  • Runs the vendor port configuration subcommand
  • Nord-themed Rich console output mirrored to a plain-text log in /tmp
  • Single error trap with interactive rollback of the unit file

Requires root privileges.
Version: 1.0.0
"""

import codecs
import datetime
import logging
import os
import shutil
import signal
import subprocess
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple

import click
import pyfiglet
from rich.box import ROUNDED
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import Confirm
from rich.style import Style
from rich.table import Table
from rich.text import Text
from rich.theme import Theme
from rich.traceback import install as install_rich_traceback

install_rich_traceback(show_locals=False)


# ----------------------------------------------------------------
# Configuration & Constants
# ----------------------------------------------------------------
def _default_log_file() -> str:
    ts = datetime.datetime.now().strftime("%Y%m%d-%H%M%S")
    return f"/tmp/v2ray-setup-{ts}.log"


@dataclass
class AppConfig:
    """Settings for a single setup run."""

    # Application info
    VERSION: str = "1.0.0"
    APP_NAME: str = "V2ray Setup"
    APP_SUBTITLE: str = "Automatic Installation & Configuration"

    # Service
    SERVICE_NAME: str = "v2ray"
    BINARY_NAME: str = "v2ray"
    SERVICE_FILE: str = "/lib/systemd/system/v2ray.service"
    SECTION_HEADER: str = "[Service]"
    CONFIG_MARKER: str = "V2RAY_VMESS_AEAD_FORCED"
    ENVIRONMENT_LINE: str = 'Environment="V2RAY_VMESS_AEAD_FORCED=false"'
    V2RAY_CONFIG_FILE: str = "/etc/v2ray/config.json"

    # Installer
    INSTALLER_URL: str = (
        "https://raw.githubusercontent.com/woshihuo12/v2ray/master/install.sh"
    )

    # Network
    V2RAY_PORT: int = 52821
    V2RAY_PROTOCOL: str = "vmess"

    # Logging
    LOG_FILE: str = field(default_factory=_default_log_file)

    @property
    def BACKUP_FILE(self) -> str:
        return f"{self.SERVICE_FILE}.backup"


LOG_FORMAT = "%(asctime)s | %(levelname)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


# ----------------------------------------------------------------
# Nord-Themed Colors and Rich Console
# ----------------------------------------------------------------
class NordColors:
    """Nord color palette used across the console output."""

    SNOW_STORM_1: str = "#D8DEE9"
    SNOW_STORM_2: str = "#E5E9F0"
    FROST_1: str = "#8FBCBB"
    FROST_2: str = "#88C0D0"
    FROST_3: str = "#81A1C1"
    FROST_4: str = "#5E81AC"
    RED: str = "#BF616A"
    YELLOW: str = "#EBCB8B"
    GREEN: str = "#A3BE8C"
    PURPLE: str = "#B48EAD"


console = Console(
    theme=Theme(
        {
            "info": f"bold {NordColors.FROST_2}",
            "warning": f"bold {NordColors.YELLOW}",
            "error": f"bold {NordColors.RED}",
            "success": f"bold {NordColors.GREEN}",
            "step": f"{NordColors.FROST_2}",
            "prompt": f"bold {NordColors.PURPLE}",
            "command": f"bold {NordColors.FROST_4}",
            "path": f"italic {NordColors.FROST_1}",
        }
    )
)

logger = logging.getLogger("v2ray_setup")


# ----------------------------------------------------------------
# Custom Exceptions
# ----------------------------------------------------------------
class SetupError(Exception):
    """Base exception for setup errors."""

    pass


class PrivilegeError(SetupError):
    """Raised when the utility is not running as root."""

    pass


class InstallationError(SetupError):
    """Raised when the V2ray binary is still missing after installation."""

    pass


class ConfigurationError(SetupError):
    """Raised when the unit file cannot be read, backed up or patched."""

    pass


class ServiceError(SetupError):
    """Raised when the service is not active after a restart."""

    pass


class ExecutionError(SetupError):
    """Raised when an external command fails."""

    def __init__(self, cmd: str, returncode: int, output: str = "") -> None:
        self.cmd = cmd
        self.returncode = returncode
        self.output = output
        message = f"Command failed (code {returncode}): {cmd}"
        if output:
            message += f"\nOutput: {output}"
        super().__init__(message)


# ----------------------------------------------------------------
# Logging and Banner Helpers
# ----------------------------------------------------------------
def setup_logging(log_file: str) -> logging.Logger:
    """
    Attach a plain-text file handler to the setup logger.

    Every console helper below also logs its message, so the file ends up as
    an uncolored mirror of the console output.

    Args:
        log_file: Path of the log file, opened in append mode

    Returns:
        The configured logger
    """
    Path(log_file).parent.mkdir(parents=True, exist_ok=True)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT, LOG_DATE_FORMAT))
    logger.addHandler(file_handler)
    logger.setLevel(logging.DEBUG)
    logger.propagate = False

    logger.info("Logging initialized: %s", log_file)
    return logger


def create_header(config: AppConfig) -> Panel:
    """
    Create an ASCII art header using Pyfiglet with a Frost gradient.

    Args:
        config: Run configuration providing the title and version

    Returns:
        Panel: A Rich Panel containing the styled header.
    """
    fonts = ["slant", "small", "standard"]
    ascii_art = ""
    width = min(console.width - 10, 80)

    for font in fonts:
        try:
            ascii_art = pyfiglet.Figlet(font=font, width=width).renderText(
                config.APP_NAME
            )
            if ascii_art.strip():
                break
        except pyfiglet.FontNotFound:
            logger.debug("Font %s not available", font)

    if not ascii_art.strip():
        ascii_art = f"=== {config.APP_NAME} ===\n"

    colors = [
        NordColors.FROST_1,
        NordColors.FROST_2,
        NordColors.FROST_3,
        NordColors.FROST_4,
    ]
    lines = [line for line in ascii_art.splitlines() if line.strip()]
    styled_text = ""
    for i, line in enumerate(lines):
        styled_text += f"[bold {colors[i % len(colors)]}]{escape(line)}[/]\n"

    return Panel(
        Text.from_markup(styled_text.rstrip("\n")),
        border_style=Style(color=NordColors.FROST_1),
        padding=(1, 2),
        box=ROUNDED,
        title=f"[bold {NordColors.SNOW_STORM_2}]v{config.VERSION}[/]",
        title_align="right",
        subtitle=f"[bold {NordColors.SNOW_STORM_1}]{config.APP_SUBTITLE}[/]",
        subtitle_align="center",
    )


def print_message(
    text: str,
    style: str = NordColors.FROST_2,
    prefix: str = "•",
    level: int = logging.INFO,
) -> None:
    """
    Print a styled message to the console and mirror it to the log.

    Args:
        text: The message to print
        style: The color to use
        prefix: Symbol to prefix the message with
        level: Logging level used for the log mirror
    """
    console.print(f"[{style}]{prefix} {escape(text)}[/]")
    logger.log(level, text)


def print_step(text: str) -> None:
    print_message(text, NordColors.FROST_3, "➜")


def print_success(text: str) -> None:
    print_message(text, NordColors.GREEN, "✓")


def print_warning(text: str) -> None:
    print_message(text, NordColors.YELLOW, "⚠", logging.WARNING)


def print_error(text: str) -> None:
    print_message(text, NordColors.RED, "✗", logging.ERROR)


def print_section(title: str) -> None:
    """
    Print a section header using Pyfiglet small font with a separator.

    Args:
        title: The section title to display
    """
    console.print()

    try:
        section_art = pyfiglet.figlet_format(title, font="small")
        console.print(
            section_art,
            style=f"bold {NordColors.FROST_2}",
            markup=False,
            highlight=False,
        )
    except pyfiglet.FontNotFound:
        console.print(f"[bold {NordColors.FROST_1}]== {escape(title.upper())} ==[/]")

    console.print(f"[{NordColors.FROST_3}]{'─' * 60}[/]")
    logger.info("--- %s ---", title)


# ----------------------------------------------------------------
# Command Execution Helpers
# ----------------------------------------------------------------
def command_exists(cmd: str) -> bool:
    """Check if a command exists in the system PATH."""
    return shutil.which(cmd) is not None


def run_command(
    cmd: List[str],
    check: bool = True,
    capture_output: bool = True,
    timeout: Optional[int] = None,
) -> subprocess.CompletedProcess:
    """
    Execute a system command and translate failures into ExecutionError.

    Args:
        cmd: Command to execute
        check: Whether to raise on a non-zero exit status
        capture_output: Whether to capture stdout/stderr; when False the
            command shares the terminal
        timeout: Command timeout in seconds

    Returns:
        subprocess.CompletedProcess object

    Raises:
        ExecutionError: If the command fails and check is set, or if the
            executable cannot be started
    """
    cmd_str = " ".join(cmd)
    logger.debug("Executing: %s", cmd_str)

    try:
        result = subprocess.run(
            cmd,
            check=False,
            text=True,
            capture_output=capture_output,
            timeout=timeout,
        )
    except FileNotFoundError as e:
        logger.error("Executable not found: %s", cmd[0])
        raise ExecutionError(cmd_str, 127, str(e)) from e
    except subprocess.TimeoutExpired as e:
        logger.error("Command timed out after %s seconds: %s", timeout, cmd_str)
        raise ExecutionError(cmd_str, -1, "timed out") from e

    if result.stdout:
        logger.debug("stdout: %s", result.stdout.strip())
    if result.stderr:
        logger.debug("stderr: %s", result.stderr.strip())

    if check and result.returncode != 0:
        output = (result.stderr or result.stdout or "").strip()
        logger.error("Command failed (code %s): %s", result.returncode, cmd_str)
        raise ExecutionError(cmd_str, result.returncode, output)

    return result


def _echo(text: str) -> None:
    """Write raw command output to the console without a trailing newline."""
    console.print(text, end="", markup=False, highlight=False, soft_wrap=True)
    console.file.flush()


def stream_command(cmd: List[str], check: bool = True) -> int:
    """
    Run a command, echoing its merged stdout/stderr to the console and log.

    Output is forwarded chunk by chunk as it arrives, so prompts without a
    trailing newline show up before the command waits for input. Stdin stays
    attached to the terminal so those prompts can be answered. Bytes that are
    not valid UTF-8 are replaced rather than aborting the command.

    Args:
        cmd: Command to execute
        check: Whether to raise on a non-zero exit status

    Returns:
        The exit status of the command

    Raises:
        ExecutionError: If the command fails and check is set
    """
    cmd_str = " ".join(cmd)
    logger.debug("Executing: %s", cmd_str)

    try:
        process = subprocess.Popen(
            cmd,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            bufsize=0,
        )
    except FileNotFoundError as e:
        logger.error("Executable not found: %s", cmd[0])
        raise ExecutionError(cmd_str, 127, str(e)) from e

    decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
    pending = ""
    try:
        fd = process.stdout.fileno()
        while True:
            chunk = os.read(fd, 4096)
            text = decoder.decode(chunk, final=not chunk)
            if text:
                _echo(text)
                pending += text
                *lines, pending = pending.split("\n")
                for line in lines:
                    logger.info(line.rstrip("\r"))
            if not chunk:
                break
        if pending:
            console.print()
            logger.info(pending.rstrip("\r"))
    except BaseException:
        process.kill()
        raise
    finally:
        process.stdout.close()
        returncode = process.wait()

    if check and returncode != 0:
        logger.error("Command failed (code %s): %s", returncode, cmd_str)
        raise ExecutionError(cmd_str, returncode)
    return returncode


# ----------------------------------------------------------------
# Unit File Helpers
# ----------------------------------------------------------------
def patch_unit_file(text: str, header: str, line: str) -> Optional[str]:
    """
    Insert a line directly after the first line starting with a section header.

    All other content, including line endings, is returned untouched.

    Args:
        text: Current unit file content
        header: Section header the line must start with (anchored at column 0)
        line: Line to insert, without a trailing newline

    Returns:
        The patched content, or None if the header is not present
    """
    lines = text.splitlines(keepends=True)
    for index, current in enumerate(lines):
        if current.startswith(header):
            if not current.endswith(("\n", "\r")):
                lines[index] = current + "\n"
            lines.insert(index + 1, f"{line}\n")
            return "".join(lines)
    return None


def read_text_exact(path: str) -> str:
    """
    Read a file without newline translation.

    Bytes that are not valid UTF-8 are kept as surrogates so that
    write_text_exact puts them back unchanged.

    Args:
        path: File to read

    Returns:
        The file content
    """
    with open(path, "r", encoding="utf-8", errors="surrogateescape", newline="") as f:
        return f.read()


def write_text_exact(path: str, content: str) -> None:
    """Write content read by read_text_exact back byte for byte."""
    with open(path, "w", encoding="utf-8", errors="surrogateescape", newline="") as f:
        f.write(content)


# ----------------------------------------------------------------
# Main Orchestration Class
# ----------------------------------------------------------------
class V2raySetup:
    """Sequential V2ray installation pipeline with a single error trap."""

    def __init__(self, config: AppConfig) -> None:
        self.config = config
        self.current_step: Optional[str] = None
        self.steps: List[Tuple[str, str, Callable[[], None]]] = [
            ("install", "Step 1: Installing V2ray", self.install_v2ray),
            (
                "unit_file",
                "Step 2: Configuring systemd service",
                self.configure_systemd_service,
            ),
            (
                "service",
                "Step 3: Reloading systemd and restarting V2ray service",
                self.reload_and_restart_service,
            ),
            (
                "boot",
                "Step 4: Enabling V2ray service on boot",
                self.enable_service_on_boot,
            ),
            ("bbr", "Step 5: Configuring BBR", self.configure_bbr),
            ("firewall", "Step 6: Configuring firewall rules", self.configure_firewall),
            (
                "port",
                "Step 7: Interactive V2ray configuration",
                self.configure_v2ray_port,
            ),
        ]
        self.status: Dict[str, Dict[str, str]] = {
            key: {"status": "pending", "message": ""} for key, _, _ in self.steps
        }

    # ------------------------------------------------------------
    # Preflight
    # ------------------------------------------------------------
    def check_root(self) -> None:
        """
        Ensure the utility runs as root.

        Raises:
            PrivilegeError: If not running as root
        """
        print_step("Checking prerequisites...")
        if os.geteuid() != 0:
            print_error("This script must be run as root")
            raise PrivilegeError("This script must be run as root")
        print_success("Running as root")

    # ------------------------------------------------------------
    # Pipeline steps
    # ------------------------------------------------------------
    def install_v2ray(self) -> None:
        """
        Install V2ray with the vendor installer unless it is already present.

        The installer's exit status is not used; the binary lookup afterwards
        decides success.

        Raises:
            InstallationError: If the binary is still missing afterwards
        """
        binary = self.config.BINARY_NAME
        if command_exists(binary):
            print_warning("V2ray is already installed. Skipping installation")
            return

        print_step("Running V2ray official installer script...")
        installer = f"bash <(wget -qO- -o- {self.config.INSTALLER_URL})"
        returncode = stream_command(["bash", "-c", installer], check=False)
        logger.debug("Installer exited with code %s", returncode)

        if not command_exists(binary):
            print_error("V2ray installation failed")
            raise InstallationError(f"{binary} not found after running installer")
        print_success("V2ray installed successfully")

    def configure_systemd_service(self) -> None:
        """
        Add the AEAD environment override to the [Service] section.

        A no-op when the marker is already present. Otherwise the unit file is
        copied to its .backup path before the single line is inserted.

        Raises:
            ConfigurationError: If the unit file is missing, cannot be backed
                up or written, or has no section header
        """
        cfg = self.config
        service_file = cfg.SERVICE_FILE

        if not os.path.isfile(service_file):
            print_error(f"V2ray service file not found at {service_file}")
            raise ConfigurationError(f"Service file not found: {service_file}")

        try:
            content = read_text_exact(service_file)
        except OSError as e:
            raise ConfigurationError(f"Cannot read {service_file}: {e}") from e

        if cfg.CONFIG_MARKER in content:
            print_warning(f"{cfg.CONFIG_MARKER} is already configured")
            return

        print_step("Creating backup of service file...")
        try:
            shutil.copy2(service_file, cfg.BACKUP_FILE)
        except OSError as e:
            print_error(f"Failed to create backup at {cfg.BACKUP_FILE}: {e}")
            raise ConfigurationError(f"Backup failed for {service_file}: {e}") from e
        print_success(f"Backup created at {cfg.BACKUP_FILE}")

        print_step(f"Adding {cfg.ENVIRONMENT_LINE} to service file...")
        patched = patch_unit_file(content, cfg.SECTION_HEADER, cfg.ENVIRONMENT_LINE)
        if patched is None:
            print_error(f"Could not find {cfg.SECTION_HEADER} section in {service_file}")
            raise ConfigurationError(
                f"{cfg.SECTION_HEADER} section missing from {service_file}"
            )

        try:
            write_text_exact(service_file, patched)
        except OSError as e:
            raise ConfigurationError(f"Cannot write {service_file}: {e}") from e
        print_success("Environment variable added to service file")

    def reload_and_restart_service(self) -> None:
        """
        Reload systemd, restart the service and verify it is active.

        Raises:
            ExecutionError: If reload or restart fails
            ServiceError: If the service is not active afterwards
        """
        name = self.config.SERVICE_NAME

        print_step("Running systemctl daemon-reload...")
        run_command(["systemctl", "daemon-reload"])
        print_success("Daemon reloaded")

        print_step("Restarting V2ray service...")
        run_command(["service", name, "restart"])
        print_success("V2ray service restarted")

        result = run_command(["systemctl", "is-active", "--quiet", name], check=False)
        if result.returncode != 0:
            print_error("V2ray service failed to start")
            raise ServiceError(f"{name} is not active after restart")
        print_success("V2ray service is running")

    def enable_service_on_boot(self) -> None:
        """
        Enable the service at boot.

        Raises:
            ExecutionError: If systemctl enable fails
        """
        run_command(["systemctl", "enable", self.config.SERVICE_NAME])
        print_success("V2ray enabled on boot")

    def configure_bbr(self) -> None:
        """
        Enable BBR congestion control through the vendor CLI.

        The command shares the terminal since it may print progress or ask for
        confirmation.

        Raises:
            ExecutionError: If the vendor command fails
        """
        run_command([self.config.BINARY_NAME, "bbr"], capture_output=False)
        print_success("BBR configured")

    def configure_firewall(self) -> None:
        """
        Allow the V2ray TCP port through UFW.

        Raises:
            ExecutionError: If ufw fails
        """
        port = self.config.V2RAY_PORT
        print_step(f"Adding firewall rule for V2ray port {port}...")
        run_command(["ufw", "allow", f"{port}/tcp"])
        print_success("Firewall rule added")

    def configure_v2ray_port(self) -> None:
        """Run the vendor port subcommand with the configured protocol and port."""
        cfg = self.config
        print_step("The V2ray service is now running. Applying port configuration.")
        console.print("\n[warning]Starting V2ray configuration...[/]\n")
        stream_command(
            [cfg.BINARY_NAME, "port", cfg.V2RAY_PROTOCOL, str(cfg.V2RAY_PORT)]
        )
        print_success(
            f"V2ray configured for {cfg.V2RAY_PROTOCOL} on port {cfg.V2RAY_PORT}"
        )

    # ------------------------------------------------------------
    # Reporting
    # ------------------------------------------------------------
    def status_report(self) -> None:
        """Display a table with the status of every pipeline step."""
        icons = {"success": "✓", "failed": "✗", "pending": "?", "in_progress": "⋯"}
        styles = {
            "success": "success",
            "failed": "error",
            "in_progress": "warning",
            "pending": "step",
        }

        table = Table(
            show_header=True,
            header_style=f"bold {NordColors.FROST_1}",
            border_style=NordColors.FROST_3,
            box=ROUNDED,
            title=f"[bold {NordColors.FROST_2}]V2ray Setup Status[/]",
            expand=True,
        )
        table.add_column("Task", style=f"bold {NordColors.FROST_2}")
        table.add_column("Status", justify="center")
        table.add_column("Message", style=NordColors.SNOW_STORM_1, ratio=3)

        for key, description, _ in self.steps:
            data = self.status[key]
            st = data["status"]
            table.add_row(
                description.split(": ", 1)[-1],
                f"[{styles.get(st, 'step')}]{icons.get(st, '?')} {st.upper()}[/]",
                escape(data["message"]),
            )
            logger.info("Status %s: %s %s", key, st, data["message"])

        console.print(table)

    def show_summary(self) -> None:
        """Print the completion panel with follow-up commands."""
        cfg = self.config
        name = cfg.SERVICE_NAME
        completed = [
            "V2ray installed",
            f"Systemd service configured with {cfg.CONFIG_MARKER}=false",
            "Service restarted and verified",
            "Service enabled on boot",
            "BBR configured",
            "Firewall rules configured",
            "Interactive configuration completed",
        ]
        commands = [
            ("Check service status", f"systemctl status {name}"),
            ("View service logs", f"journalctl -u {name} -f"),
            ("Edit config", f"nano {cfg.V2RAY_CONFIG_FILE}"),
            ("Restart service", f"service {name} restart"),
        ]

        body = Text()
        body.append("Summary of completed tasks:\n", style=f"bold {NordColors.FROST_2}")
        for task in completed:
            body.append(f"  ✓ {task}\n", style=NordColors.GREEN)
        body.append("\nUseful commands:\n", style=f"bold {NordColors.FROST_2}")
        for label, command in commands:
            body.append(f"  {label + ':':<22}", style=NordColors.SNOW_STORM_1)
            body.append(f"{command}\n", style=f"bold {NordColors.FROST_4}")
        body.append(f"\nLog file: {cfg.LOG_FILE}", style=f"italic {NordColors.FROST_1}")

        console.print()
        console.print(
            Panel(
                body,
                title=f"[bold {NordColors.GREEN}]V2ray Auto Setup Complete![/]",
                border_style=Style(color=NordColors.FROST_1),
                box=ROUNDED,
                padding=(1, 2),
            )
        )
        logger.info("V2ray Auto Setup Complete")
        for task in completed:
            logger.info("Completed: %s", task)

    # ------------------------------------------------------------
    # Error trap
    # ------------------------------------------------------------
    def error_handler(self, error: BaseException) -> None:
        """
        Report the failing step and offer to restore the unit file backup.

        Never raises; the caller exits with status 1 whatever happens here.
        """
        cfg = self.config
        print_error(f"Setup failed at step: {self.current_step}")
        print_error(str(error))
        self.status_report()

        backup = cfg.BACKUP_FILE
        if not os.path.isfile(backup):
            return

        console.print("\n[warning]Rollback option:[/]")
        print_message(f"Service file backup is available at: {backup}")
        try:
            restore = Confirm.ask(
                "Do you want to restore the backup?", console=console, default=False
            )
        except EOFError:
            restore = False

        if not restore:
            logger.info("Rollback declined")
            return

        try:
            shutil.copy2(backup, cfg.SERVICE_FILE)
            run_command(["systemctl", "daemon-reload"])
        except (OSError, ExecutionError) as e:
            print_error(f"Rollback failed: {e}")
            return
        print_message("Service file restored from backup")

    # ------------------------------------------------------------
    # Entry
    # ------------------------------------------------------------
    def run(self) -> int:
        """
        Run the preflight check and every pipeline step in order.

        Returns:
            int: Exit code (0 for success, 1 for failure)
        """
        try:
            self.check_root()
        except PrivilegeError:
            return 1

        for key, description, step in self.steps:
            self.current_step = key
            self.status[key] = {"status": "in_progress", "message": ""}
            print_section(description)
            try:
                step()
            except Exception as e:
                self.status[key] = {"status": "failed", "message": str(e)}
                self.error_handler(e)
                return 1
            self.status[key] = {"status": "success", "message": description}

        self.current_step = None
        self.show_summary()
        return 0


# ----------------------------------------------------------------
# Signal Handling
# ----------------------------------------------------------------
def signal_handler(signum: int, frame: Optional[Any]) -> None:
    """Log the interruption and exit with a signal-specific code."""
    sig_name = f"signal {signum}"
    try:
        sig_name = signal.Signals(signum).name
    except ValueError:
        pass

    console.print()
    print_warning(f"Process interrupted by {sig_name}")
    sys.exit(128 + signum)


# ----------------------------------------------------------------
# Main Entry Point
# ----------------------------------------------------------------
@click.command()
@click.version_option(version=AppConfig.VERSION, prog_name="v2ray-setup")
def main() -> None:
    """Install and configure the V2ray proxy service (run as root)."""
    for sig in (signal.SIGINT, signal.SIGTERM):
        signal.signal(sig, signal_handler)

    config = AppConfig()
    setup_logging(config.LOG_FILE)

    console.clear()
    console.print(create_header(config))
    now = datetime.datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    print_step(f"Setup started at {now}")
    print_step(f"Log file: {config.LOG_FILE}")

    sys.exit(V2raySetup(config).run())


if __name__ == "__main__":
    main()
