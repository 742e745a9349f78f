"""Event-log client that runs Get-WinEvent / Get-EventLog through PowerShell."""

import asyncio
import contextlib
import json
import os
from datetime import datetime, timezone

from ..config import DEFAULT_POWERSHELL
from ..logging_config import get_logger
from ..models import Credential, EventLevel, EventRecord, LegacyLogEntry, LogChannel
from .errors import ErrorKind, EventQueryError, classify_error

logger = get_logger(__name__)


# Every script prints exactly one JSON document on stdout:
# {"ok": true, "data": [...]} or {"ok": false, "error": {...}}
_SCRIPT_TEMPLATE = """
$ErrorActionPreference = 'Stop'
$params = @{{ ComputerName = $env:FLEET_EVENTS_HOST }}
if ($env:FLEET_EVENTS_USE_CREDENTIAL -and $env:FLEET_EVENTS_USER) {{
    $secure = ConvertTo-SecureString $env:FLEET_EVENTS_PASSWORD -AsPlainText -Force
    $params.Credential = New-Object System.Management.Automation.PSCredential($env:FLEET_EVENTS_USER, $secure)
}}
try {{
    $data = @({body})
    ConvertTo-Json -Compress -Depth 4 -InputObject @{{ ok = $true; data = $data }}
}} catch {{
    $err = @{{
        message = $_.Exception.Message
        hresult = $_.Exception.HResult
        errorId = $_.FullyQualifiedErrorId
    }}
    ConvertTo-Json -Compress -InputObject @{{ ok = $false; error = $err }}
}}
"""

_TIME_FORMAT = "yyyy-MM-ddTHH:mm:ss.ffffffZ"

_LIST_LOGS_BODY = """
    $logs = Get-WinEvent -ListLog * @params -ErrorAction SilentlyContinue -ErrorVariable listErrors
    if (-not $logs -and $listErrors) { throw $listErrors[0] }
    $logs | ForEach-Object {
        @{
            logName = $_.LogName
            logType = "$($_.LogType)"
            logIsolation = "$($_.LogIsolation)"
            recordCount = $_.RecordCount
        }
    }
"""

_QUERY_EVENTS_BODY = """
    $filter = @{
        LogName = @($env:FLEET_EVENTS_LOG_NAMES | ConvertFrom-Json)
        Level = @($env:FLEET_EVENTS_LEVELS | ConvertFrom-Json)
        StartTime = [datetime]::Parse($env:FLEET_EVENTS_START, $null, 'RoundtripKind')
    }
    Get-WinEvent @params -FilterHashtable $filter | ForEach-Object {
        @{
            hostName = $_.MachineName
            timeCreated = $_.TimeCreated.ToUniversalTime().ToString('%(fmt)s')
            providerName = $_.ProviderName
            logName = $_.LogName
            eventId = $_.Id
            levelDisplayName = $_.LevelDisplayName
            message = $_.Message
        }
    }
""" % {"fmt": _TIME_FORMAT}

# Get-EventLog has no -Credential parameter
_LEGACY_BODY = """
    $params.Remove('Credential')
    Get-EventLog @params -LogName $env:FLEET_EVENTS_LOG_NAME -EntryType $env:FLEET_EVENTS_ENTRY_TYPE -Newest ([int]$env:FLEET_EVENTS_NEWEST) | ForEach-Object {
        @{
            machineName = $_.MachineName
            timeGenerated = $_.TimeGenerated.ToUniversalTime().ToString('%(fmt)s')
            source = $_.Source
            eventId = $_.EventID
            entryType = "$($_.EntryType)"
            message = $_.Message
        }
    }
""" % {"fmt": _TIME_FORMAT}


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 timestamp into an aware UTC datetime."""
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


class PowerShellEventLogClient:
    """Runs event-log cmdlets against remote hosts via a PowerShell child process."""

    def __init__(
        self,
        executable: str = DEFAULT_POWERSHELL,
        timeout: float | None = None,
    ):
        self._executable = executable
        self._timeout = timeout

    async def list_logs(
        self, host_name: str, credential: Credential | None = None
    ) -> list[LogChannel]:
        """Enumerate log channels with Get-WinEvent -ListLog."""
        rows = await self._run(host_name, _LIST_LOGS_BODY, {}, credential)
        try:
            return [
                LogChannel(
                    log_name=row["logName"],
                    log_type=row.get("logType") or "",
                    log_isolation=row.get("logIsolation") or "",
                    record_count=row.get("recordCount"),
                )
                for row in rows
            ]
        except (KeyError, TypeError) as e:
            raise EventQueryError(
                ErrorKind.UNKNOWN, f"Malformed log list from {host_name}: {e}"
            ) from e

    async def query_events(
        self,
        host_name: str,
        log_names: list[str],
        levels: list[EventLevel],
        start_time: datetime,
        credential: Credential | None = None,
    ) -> list[EventRecord]:
        """Query events with Get-WinEvent -FilterHashtable."""
        env = {
            "FLEET_EVENTS_LOG_NAMES": json.dumps(list(log_names)),
            "FLEET_EVENTS_LEVELS": json.dumps([int(level) for level in levels]),
            "FLEET_EVENTS_START": start_time.astimezone(timezone.utc).isoformat(),
        }
        rows = await self._run(host_name, _QUERY_EVENTS_BODY, env, credential)
        try:
            return [
                EventRecord(
                    host_name=row.get("hostName") or host_name,
                    time_created=parse_timestamp(row["timeCreated"]),
                    provider_name=row.get("providerName") or "",
                    log_name=row.get("logName") or "",
                    event_id=int(row["eventId"]),
                    level_display_name=row.get("levelDisplayName") or "",
                    message=row.get("message") or "",
                )
                for row in rows
            ]
        except (KeyError, TypeError, ValueError) as e:
            raise EventQueryError(
                ErrorKind.UNKNOWN, f"Malformed events from {host_name}: {e}"
            ) from e

    async def read_legacy_log(
        self,
        host_name: str,
        log_name: str,
        entry_type: str,
        newest: int,
        credential: Credential | None = None,
    ) -> list[LegacyLogEntry]:
        """Read the newest entries of a log with Get-EventLog."""
        if credential is not None:
            logger.debug(
                "Get-EventLog cannot take a credential; querying %s as the current identity",
                host_name,
            )
        env = {
            "FLEET_EVENTS_LOG_NAME": log_name,
            "FLEET_EVENTS_ENTRY_TYPE": entry_type,
            "FLEET_EVENTS_NEWEST": str(newest),
        }
        rows = await self._run(host_name, _LEGACY_BODY, env, None)
        try:
            return [
                LegacyLogEntry(
                    machine_name=row.get("machineName") or host_name,
                    time_generated=parse_timestamp(row["timeGenerated"]),
                    source=row.get("source") or "",
                    event_id=int(row["eventId"]),
                    entry_type=row.get("entryType") or entry_type,
                    message=row.get("message") or "",
                )
                for row in rows
            ]
        except (KeyError, TypeError, ValueError) as e:
            raise EventQueryError(
                ErrorKind.UNKNOWN, f"Malformed legacy entries from {host_name}: {e}"
            ) from e

    async def _run(
        self,
        host_name: str,
        body: str,
        env_extra: dict[str, str],
        credential: Credential | None,
    ) -> list[dict]:
        """Run one script and return its data rows or raise EventQueryError."""
        env = dict(os.environ)
        env.update(env_extra)
        env["FLEET_EVENTS_HOST"] = host_name
        if credential is not None:
            env["FLEET_EVENTS_USE_CREDENTIAL"] = "1"
            env["FLEET_EVENTS_USER"] = credential.username
            env["FLEET_EVENTS_PASSWORD"] = credential.password.get_secret_value()

        script = _SCRIPT_TEMPLATE.format(body=body)
        try:
            proc = await asyncio.create_subprocess_exec(
                self._executable,
                "-NoProfile",
                "-NonInteractive",
                "-Command",
                script,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                env=env,
            )
        except FileNotFoundError as e:
            raise EventQueryError(
                ErrorKind.UNKNOWN, f"PowerShell executable not found: {self._executable}"
            ) from e

        try:
            stdout, stderr = await asyncio.wait_for(proc.communicate(), timeout=self._timeout)
        except asyncio.TimeoutError:
            raise EventQueryError(
                ErrorKind.UNKNOWN,
                f"PowerShell query against {host_name} timed out after {self._timeout}s",
            ) from None
        finally:
            # Timed out or cancelled: the child must not outlive the query
            if proc.returncode is None:
                with contextlib.suppress(ProcessLookupError):
                    proc.kill()
                await proc.wait()

        return self._parse_output(
            host_name,
            stdout.decode("utf-8", errors="replace"),
            stderr.decode("utf-8", errors="replace"),
            proc.returncode,
        )

    @staticmethod
    def _parse_output(
        host_name: str, stdout: str, stderr: str, returncode: int | None
    ) -> list[dict]:
        lines = [line for line in stdout.splitlines() if line.strip()]
        try:
            document = json.loads(lines[-1])
        except (IndexError, json.JSONDecodeError):
            detail = stderr.strip() or f"no JSON output (exit code {returncode})"
            raise EventQueryError(classify_error(detail), detail) from None

        if not isinstance(document, dict):
            raise EventQueryError(ErrorKind.UNKNOWN, f"Unexpected output from {host_name}")

        if not document.get("ok"):
            error = document.get("error") or {}
            message = error.get("message") or "unknown PowerShell error"
            kind = classify_error(message, error.get("hresult"), error.get("errorId"))
            raise EventQueryError(kind, message)

        data = document.get("data")
        if data is None:
            return []
        if isinstance(data, dict):
            return [data]
        return list(data)
