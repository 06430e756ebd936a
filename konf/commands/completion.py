"""Shell completion scripts for the konf wrapper function."""

from __future__ import annotations

import enum
import sys
from dataclasses import dataclass
from typing import TextIO

from konf.errors import KonfError


class ShellCompDirective(enum.IntFlag):
    """Hints passed to the shell along with completion candidates."""

    DEFAULT = 0
    ERROR = 1
    NO_SPACE = 2
    NO_FILE_COMP = 4
    FILTER_FILE_EXT = 8
    FILTER_DIRS = 16
    KEEP_ORDER = 32


# The scripts below ask the binary for candidates via
# 'konf-go __complete <args...> <word being completed>'. It prints one
# candidate per line (optionally followed by a tab and a description) and
# ends with a line ':<directive>'. They always call the binary konf-go, not
# the konf shell function that wraps it.

_ZSH = r"""#compdef _konf konf
compdef _konf konf

_konf() {
  local -a completions nospace
  local out directive
  out=$(konf-go __complete "${(@)words[2,CURRENT-1]}" "${words[CURRENT]}" 2>/dev/null) || return 1
  completions=("${(@f)out}")
  directive=${completions[-1]#:}
  completions=("${(@)completions[1,-2]}")
  completions=("${(@)completions%%$'\t'*}")
  (( directive & 1 )) && return 1
  (( directive & 2 )) && nospace=(-S '')
  if (( ${#completions} > 0 )); then
    compadd "${nospace[@]}" -- "${completions[@]}"
  elif (( ! (directive & 4) )); then
    _files
  fi
}

if [ "$funcstack[1]" = "_konf" ]; then
  _konf "$@"
fi
"""

_BASH = r"""# bash completion for konf

_konf() {
  local cur out directive
  cur="${COMP_WORDS[COMP_CWORD]}"
  out=$(konf-go __complete "${COMP_WORDS[@]:1:COMP_CWORD-1}" "$cur" 2>/dev/null) || return
  directive=$(printf '%s\n' "$out" | tail -n 1)
  directive=${directive#:}
  out=$(printf '%s\n' "$out" | sed '$d' | cut -f1)
  if (( directive & 1 )); then
    return
  fi
  local IFS=$'\n'
  COMPREPLY=($(compgen -W "$out" -- "$cur"))
  if (( directive & 2 )); then
    compopt -o nospace 2>/dev/null
  fi
  if (( ${#COMPREPLY[@]} == 0 )) && (( (directive & 4) == 0 )); then
    compopt -o default 2>/dev/null
  fi
  return 0
}

complete -F _konf konf
"""

_FISH = r"""# fish completion for konf-go

function __konf_complete
    set -l args (commandline -opc)
    set -e args[1]
    set -l out (konf-go __complete $args (commandline -ct) 2>/dev/null)
    or return
    set -l directive (string replace -r '^:' '' -- $out[-1])
    set -e out[-1]
    if test (math "bitand($directive, 1)") -ne 0
        return
    end
    for line in $out
        echo $line
    end
end

complete -c konf-go -e
complete -c konf-go -f -a '(__konf_complete)'
"""

_SCRIPTS = {"zsh": _ZSH, "bash": _BASH, "fish": _FISH}


def completion_script(shell: str) -> str:
    """Completion script for bash, zsh or fish."""
    try:
        return _SCRIPTS[shell]
    except KeyError:
        raise KonfError(f"konf currently does not support autocompletions for {shell}") from None


@dataclass
class CompletionCommand:
    """'konf completion [bash|zsh|fish]': print a completion script."""

    stdout: TextIO | None = None

    def run(self, args: list[str]) -> None:
        if len(args) != 1:
            raise KonfError(f"accepts 1 arg(s), received {len(args)}")
        (self.stdout or sys.stdout).write(completion_script(args[0]))