"""
Commands executed inside a MongoDB node through its shell.

Everything runs as ``<shell> [auth args] --eval <script>``. The wait-for-primary
script is the only JavaScript built by string formatting; its contract is:

* input: an attempt ceiling and a sleep interval in milliseconds
* output: exit code 0 once ``isMaster`` reports the node as primary,
  exit code 1 once the attempt counter exceeds the ceiling
"""
from typing import List, Optional

from embedded_mongo.config import settings
from embedded_mongo.models.credentials import Credentials

AUTHENTICATION_DATABASE = "admin"
INITIATE_REPLICA_SET_SCRIPT = "rs.initiate();"
IS_NOT_MASTER_CONDITION = "db.runCommand( { isMaster: 1 } ).ismaster==false"
AWAIT_PROGRESS_MESSAGE = "An attempt to await for a single node replica set initialization:"


def build_eval_command(
    script: str,
    credentials: Credentials,
    shell: Optional[str] = None
) -> List[str]:
    """Wrap a script into a shell ``--eval`` argv, authenticating as root if needed"""
    shell = shell or settings.mongo_shell
    if credentials.auth_enabled:
        return [
            shell,
            "-u", credentials.username,
            "-p", credentials.password,
            "--authenticationDatabase", AUTHENTICATION_DATABASE,
            "--eval", script
        ]
    return [shell, "--eval", script]


def build_initiate_command(credentials: Credentials, shell: Optional[str] = None) -> List[str]:
    return build_eval_command(INITIATE_REPLICA_SET_SCRIPT, credentials, shell)


def build_wait_for_primary_script(max_attempts: int, interval_ms: int) -> str:
    """Script polling isMaster until the node is primary or attempts run out"""
    return (
        f"var attempt = 0; "
        f"while({IS_NOT_MASTER_CONDITION}) "
        f"{{ "
        f"if (attempt > {max_attempts}) {{quit(1);}} "
        f"print('{AWAIT_PROGRESS_MESSAGE} ' + attempt); sleep({interval_ms}); attempt++; "
        f"}}"
    )


def build_wait_for_primary_command(
    credentials: Credentials,
    max_attempts: int,
    interval_ms: int,
    shell: Optional[str] = None
) -> List[str]:
    return build_eval_command(
        build_wait_for_primary_script(max_attempts, interval_ms),
        credentials,
        shell
    )
