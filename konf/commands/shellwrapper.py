"""Shell functions that wrap the konf-go binary and export KUBECONFIG."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import TextIO

from konf.errors import KonfError

_MARKER = "KUBECONFIGCHANGE:"

_POSIX_FUNCTIONS = (
    "\n"
    "konf() {\n"
    "  res=$(konf-go $@)\n"
    f'  if [[ $res == "{_MARKER}"* ]]\n'
    "  then\n"
    f'    export KUBECONFIG="${{res#*{_MARKER}}}"\n'
    "  else\n"
    '    echo "${res}"\n'
    "  fi\n"
    "}\n"
    "konf_cleanup() {\n"
    "  konf-go cleanup\n"
    "}\n"
)

_FISH_FUNCTIONS = (
    "\n"
    "function konf -w konf-go\n"
    "    set -f res (konf-go $argv)\n"
    f"    if string match -q '{_MARKER}*' $res\n"
    f"        set -gx KUBECONFIG (string replace -r '^{_MARKER}' '' $res)\n"
    "    else\n"
    '        printf "%s\\n" $res\n'
    "    end\n"
    "end\n"
    "\n"
    "function konf_cleanup\n"
    "    konf-go cleanup\n"
    "end\n"
)

_EXIT_TRAP = "\ntrap konf_cleanup EXIT\n"

_WRAPPERS = {
    "zsh": _POSIX_FUNCTIONS + "add-zsh-hook zshexit konf_cleanup\n",
    "bash": _POSIX_FUNCTIONS + _EXIT_TRAP,
    "fish": _FISH_FUNCTIONS + _EXIT_TRAP,
}


def shell_wrapper(shell: str) -> str:
    """The wrapper function and exit hook for zsh, bash or fish."""
    try:
        return _WRAPPERS[shell]
    except KeyError:
        raise KonfError(f"konf currently does not support {shell}") from None


@dataclass
class ShellwrapperCommand:
    """'konf shellwrapper <shell>': print the wrapper to source in an rc file."""

    stdout: TextIO | None = None

    def run(self, args: list[str]) -> None:
        if len(args) != 1:
            raise KonfError(f"accepts 1 arg(s), received {len(args)}")
        print(shell_wrapper(args[0]), file=self.stdout or sys.stdout)