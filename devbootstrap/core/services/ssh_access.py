"""
SSH access workflow — from "no GitHub access" to verified SSH access.

State machine::

    bootstrap ~/.ssh ──► register host key ──────► probe
                                                      │
        ┌───────────── success ───────────────────────┤──► ACCEPT
        │             repository not found / unknown ─┤──► REJECT
        │             permission denied ──────────────┘
        │                  │
        │             ask to generate ── declined ──► REJECT
        │                  │ accepted
        │             generate key, update config, wait for operator
        │                  │
        └──────────── probe (second and last time)
                           permission denied again ───► REJECT

ACCEPT returns an SshAccessResult. Every REJECT raises a
``BootstrapError`` subclass; the CLI turns it into exit code 1.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from devbootstrap.core.context import BootstrapContext
from devbootstrap.core.errors import (
    AccessDeniedError,
    HostKeyScanError,
    KeyGenerationError,
    RemediationDeclinedError,
    RepositoryNotFoundError,
    UnknownConnectivityError,
)
from devbootstrap.core.models.command import CommandResult
from devbootstrap.core.models.ssh import (
    PERMISSION_DENIED_MARKER,
    REPOSITORY_NOT_FOUND_MARKER,
    ConnectivityVerdict,
    SshAccessResult,
)
from devbootstrap.core.services.environment import expand_home
from devbootstrap.core.services.ssh_config import update_ssh_config

logger = logging.getLogger(__name__)

# Key types ssh-keyscan can print; anything else in its output is noise
_HOST_KEY_TYPES = ("ssh-", "ecdsa-", "sk-")


def classify_probe(result: CommandResult) -> ConnectivityVerdict:
    """Map a ``git ls-remote`` result to a connectivity verdict.

    The permission marker wins when both markers are present.
    """
    if result.ok:
        return ConnectivityVerdict.SUCCESS
    if result.contains(PERMISSION_DENIED_MARKER):
        return ConnectivityVerdict.PERMISSION_DENIED
    if result.contains(REPOSITORY_NOT_FOUND_MARKER):
        return ConnectivityVerdict.NOT_FOUND
    return ConnectivityVerdict.UNKNOWN


def host_key_lines(scan_output: str) -> list[str]:
    """Extract known_hosts entries from ssh-keyscan output.

    Drops the ``# host:22 SSH-2.0-...`` banners and any error text
    that was merged in from stderr.
    """
    entries = []
    for line in scan_output.splitlines():
        fields = line.split()
        if len(fields) >= 3 and not line.startswith("#") and fields[1].startswith(_HOST_KEY_TYPES):
            entries.append(line.strip())
    return entries


class SshAccessWorkflow:
    """Establish and prove SSH access to the configured git host."""

    def __init__(self, ctx: BootstrapContext):
        self.ctx = ctx
        self.settings = ctx.settings
        self.runner = ctx.runner
        self.prompter = ctx.prompter

    @property
    def host(self) -> str:
        return self.settings.git_host

    # ── Local state ─────────────────────────────────────────────

    def bootstrap_local_state(self) -> list[str]:
        """Ensure ~/.ssh (700) and ~/.ssh/known_hosts (644) exist.

        Returns:
            Paths created by this call (empty when nothing was missing).
        """
        created: list[str] = []
        ssh_dir = self.ctx.ssh_dir
        if not ssh_dir.is_dir():
            ssh_dir.mkdir(parents=True, exist_ok=True)
            os.chmod(ssh_dir, 0o700)
            created.append(str(ssh_dir))
            self.prompter.show("✅  SSH directory created.", "success")

        known_hosts = self.ctx.known_hosts
        if not known_hosts.is_file():
            known_hosts.touch()
            os.chmod(known_hosts, 0o644)
            created.append(str(known_hosts))
            self.prompter.show("✅  known_hosts file created.", "success")

        return created

    # ── Host key ────────────────────────────────────────────────

    def host_key_registered(self) -> bool:
        """Whether known_hosts already has a key for the host (hashed or not)."""
        result = self.runner.run(
            ["ssh-keygen", "-F", self.host, "-f", str(self.ctx.known_hosts)],
        )
        return result.ok

    def register_host_key(self) -> bool:
        """Append the host's key to known_hosts unless it is already there.

        Returns:
            True if a key was appended.

        Raises:
            HostKeyScanError: If the scan fails or returns no key.
        """
        if self.host_key_registered():
            self.prompter.show(f"✅  {self.host} SSH host key already exists.", "success")
            return False

        self.prompter.show(f"🔍 Adding {self.host}'s SSH host key to known_hosts...")
        result = self.runner.run(["ssh-keyscan", "-H", self.host])
        entries = host_key_lines(result.output)
        if not result.ok or not entries:
            raise HostKeyScanError(
                f"Could not fetch the SSH host key of {self.host} "
                f"(ssh-keyscan exit {result.exit_status}). Check your network connection."
            )

        try:
            with self.ctx.known_hosts.open("a", encoding="utf-8") as f:
                for entry in entries:
                    f.write(entry + "\n")
        except OSError as e:
            raise HostKeyScanError(f"Cannot write {self.ctx.known_hosts}: {e}") from e

        logger.info("Appended %d host key(s) for %s", len(entries), self.host)
        self.prompter.show(f"✅  {self.host} SSH host key added.", "success")
        return True

    # ── Probe ───────────────────────────────────────────────────

    def probe(self) -> tuple[ConnectivityVerdict, CommandResult]:
        """List refs of the probe repository over SSH, once."""
        result = self.runner.run(
            ["git", "ls-remote", self.settings.probe_repository],
            timeout=self.settings.probe_timeout,
            env={"GIT_TERMINAL_PROMPT": "0"},
        )
        verdict = classify_probe(result)
        logger.info("Connectivity probe: %s (exit %d)", verdict.value, result.exit_status)
        if not result.ok:
            logger.debug("Probe output:\n%s", result.output)
        return verdict, result

    # ── Remediation ─────────────────────────────────────────────

    def offer_key_generation(self) -> bool:
        """Ask whether to generate a new key (default yes)."""
        return self.prompter.ask_yes_no("Do you want to generate a new SSH key?", default=True)

    # ── Key generation ──────────────────────────────────────────

    def default_email(self) -> str:
        """Global git user.email, or the organizational placeholder."""
        email = (self.ctx.git_config.read("user.email") or "").strip()
        return email or self.settings.fallback_email

    def key_destination(self) -> Path:
        """Ask for the key path; a leading ``~`` is expanded."""
        default = str(expand_home(self.settings.default_key_path, self.ctx.home))
        raw = self.prompter.ask_text("Enter the path to store the SSH key", default=default)
        return expand_home(raw.strip() or default, self.ctx.home)

    def create_key(self, email: str, key_path: Path) -> bool:
        """Generate an Ed25519 pair without passphrase at ``key_path``.

        An existing pair is never overwritten: the operator may reuse it.

        Returns:
            True if a new pair was generated, False if an existing one is reused.

        Raises:
            KeyGenerationError: On ssh-keygen failure, an incomplete pair
                (either half), or a declined reuse of an existing key.
        """
        public_path = _public_key_path(key_path)
        if key_path.exists():
            if not public_path.exists():
                raise KeyGenerationError(
                    f"{key_path} exists but {public_path} is missing. "
                    "Choose another path or restore the public key."
                )
            if self.prompter.ask_yes_no(f"A key already exists at {key_path}. Use it?", default=True):
                self.prompter.show(f"🔑 Using existing key {key_path}.")
                return False
            raise KeyGenerationError(
                f"Refusing to overwrite {key_path}. Re-run and choose another path."
            )

        if public_path.exists():
            raise KeyGenerationError(
                f"{public_path} exists without its private key. "
                "Choose another path or move the public key away."
            )

        try:
            key_path.parent.mkdir(mode=0o700, parents=True, exist_ok=True)
        except OSError as e:
            raise KeyGenerationError(f"Cannot create {key_path.parent}: {e}") from e

        result = self.runner.run(
            ["ssh-keygen", "-t", "ed25519", "-C", email, "-f", str(key_path), "-N", ""],
        )
        if not result.ok or not (key_path.exists() and public_path.exists()):
            _remove_partial_pair(key_path, public_path)
            raise KeyGenerationError(
                f"SSH key generation failed (exit {result.exit_status}). {result.output}".strip()
            )

        logger.info("Generated ed25519 key %s for %s", key_path, email)
        self.prompter.show(f"✅  SSH key generated at {key_path}.", "success")
        return True

    def generate_key(self) -> tuple[Path, bool]:
        """Pick email and path, create the key, configure ssh, show the public key.

        Returns:
            (key path, whether a new pair was generated)
        """
        default_email = self.default_email()
        email = self.prompter.ask_text("Enter your email for the SSH key", default=default_email)
        key_path = self.key_destination()

        generated = self.create_key(email, key_path)

        self.prompter.show(f"🔍 Configuring SSH config for {self.host} identity file...")
        action = update_ssh_config(
            self.ctx.ssh_config,
            self.host,
            key_path,
            macos=self.ctx.is_macos,
            home=self.ctx.home,
        )
        if action != "unchanged":
            self.prompter.show(f"📝 SSH config {action} for {self.host}.", "success")

        public_key = _public_key_path(key_path).read_text(encoding="utf-8").strip()
        self.prompter.show(f"⚠️  Add your SSH key to GitHub: {self.settings.keys_url}", "warning")
        self.prompter.show("🔗 Public Key:")
        self.prompter.show("")
        self.prompter.show(public_key, "plain")
        self.prompter.show("")
        self.prompter.wait_for_enter("Press Enter after adding your key to GitHub...")
        return key_path, generated

    # ── The loop ────────────────────────────────────────────────

    def ensure(self) -> SshAccessResult:
        """Bootstrap, register the host key, probe, remediate once; ACCEPT or raise."""
        outcome = SshAccessResult()
        outcome.created = self.bootstrap_local_state()
        outcome.host_key_added = self.register_host_key()

        while True:
            verdict, result = self.probe()
            outcome.attempts += 1

            if verdict is ConnectivityVerdict.SUCCESS:
                self.prompter.show(f"✅  SSH connection to {self.host} successful.", "success")
                return outcome

            self.prompter.show("❌  SSH connection failed. Please check your SSH keys.", "error")

            if verdict is ConnectivityVerdict.NOT_FOUND:
                raise RepositoryNotFoundError(
                    f"The repository {self.settings.probe_repository} does not exist or you lack access."
                )
            if verdict is ConnectivityVerdict.UNKNOWN:
                raise UnknownConnectivityError(
                    f"Unknown SSH error (exit {result.exit_status}): {_last_line(result.output)}"
                )

            # Permission denied
            if outcome.remediated:
                raise AccessDeniedError(
                    f"Still denied access to {self.host} with {outcome.key_path}."
                )

            self.prompter.show(
                "🔴 SSH key issue detected. Ensure your key is added to the SSH agent.", "warning"
            )
            if not self.offer_key_generation():
                raise RemediationDeclinedError(
                    "SSH key not configured. Please manually add your key and re-run."
                )

            key_path, generated = self.generate_key()
            outcome.key_path = str(key_path)
            outcome.key_generated = generated


def ensure_ssh_access(ctx: BootstrapContext) -> SshAccessResult:
    """Convenience entry point for the orchestrator and the CLI."""
    return SshAccessWorkflow(ctx).ensure()


def _public_key_path(key_path: Path) -> Path:
    return key_path.with_name(key_path.name + ".pub")


def _remove_partial_pair(*paths: Path) -> None:
    for path in paths:
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            logger.warning("Could not remove partial key file %s: %s", path, e)


def _last_line(output: str) -> str:
    lines = [line for line in output.strip().splitlines() if line.strip()]
    return lines[-1] if lines else "no output"
