"""CI action inputs and outputs passed through the environment"""

import logging
import os
import uuid
from typing import List, Mapping, Optional

from ..constants import ENV_GITHUB_OUTPUT

logger = logging.getLogger(__name__)


def _input_env_name(name: str) -> str:
    return f"INPUT_{name.replace(' ', '_').upper()}"


def get_input(name: str, env: Optional[Mapping[str, str]] = None) -> str:
    """
    Read an action input

    Args:
        name: Input name as declared by the action (e.g. ``restore-keys``)
        env: Environment mapping, defaults to os.environ

    Returns:
        Stripped input value, empty string when unset
    """
    env = os.environ if env is None else env
    return env.get(_input_env_name(name), "").strip()


def get_list_input(name: str,
                   separator: str = "\n",
                   env: Optional[Mapping[str, str]] = None) -> List[str]:
    """Read an action input as a list, dropping empty items"""
    value = get_input(name, env)
    return [item.strip() for item in value.split(separator) if item.strip()]


def set_output(name: str, value, env: Optional[Mapping[str, str]] = None) -> bool:
    """
    Write an action output to the ``GITHUB_OUTPUT`` file

    Args:
        name: Output name
        value: Output value, converted with str()
        env: Environment mapping, defaults to os.environ

    Returns:
        True if the output was written, False when no output file is configured
    """
    env = os.environ if env is None else env
    output_file = env.get(ENV_GITHUB_OUTPUT)
    if not output_file:
        logger.debug("No %s set, dropping output %s", ENV_GITHUB_OUTPUT, name)
        return False

    if isinstance(value, bool):
        value = "true" if value else "false"
    value = str(value)

    with open(output_file, 'a', encoding='utf-8') as f:
        if "\n" in value:
            delimiter = f"ghadelimiter_{uuid.uuid4()}"
            f.write(f"{name}<<{delimiter}\n{value}\n{delimiter}\n")
        else:
            f.write(f"{name}={value}\n")

    return True
