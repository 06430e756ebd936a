# konf

konf is a lightweight kubeconfig manager. Every shell session gets its own
kubeconfig, so switching the cluster in one terminal never changes it in
another one.

konf keeps a store of kubeconfigs that each hold exactly one context. Setting
a konf copies the chosen kubeconfig into an "active" file named after the
process id of the current shell and points `$KUBECONFIG` at it. When the shell
exits, its active file is removed again.

## Installation

```sh
pip install .
```

This installs the `konf-go` command. To let it change `$KUBECONFIG` in your
running shell, load the shell wrapper in your rc file:

```sh
# ~/.zshrc
source <(konf-go shellwrapper zsh)

# ~/.bashrc
source <(konf-go shellwrapper bash)
```

```fish
# ~/.config/fish/config.fish
konf-go shellwrapper fish | source
```

The wrapper defines a shell function named `konf` that passes its arguments on
to `konf-go`. When `konf-go` answers with a line of the form
`KUBECONFIGCHANGE:<path>`, the function exports `KUBECONFIG=<path>`; any other
output is printed as is. It also arranges for `konf-go cleanup` to run when the
shell exits (a `zshexit` hook in zsh, an `EXIT` trap in bash and fish).

Shell completion is available for bash, zsh and fish:

```sh
source <(konf-go completion zsh)
source <(konf-go completion bash)
konf-go completion fish | source
```

The completion scripts ask `konf-go __complete <words...>` for candidates:
sub-command names, shell names, konf ids for `set` and `delete`, and the
cluster's namespaces for `namespace`.

## Usage

Import your kubeconfigs first. A file with several contexts is split into one
konf per context; each konf is named `<context>_<cluster>`, with `/` and `:`
replaced by `-`:

```sh
konf-go import ~/Downloads/cluster.yaml   # a single file
konf-go import ~/kubeconfigs              # every non-hidden file directly in a directory
konf-go import --move ~/kubeconfigs       # delete the originals afterwards
```

Importing fails if none of the given files holds a context.

Through the `konf` wrapper function, the remaining commands are:

| Arguments | What it does |
|---|---|
| `set` | pick a konf from a searchable table |
| `set <konf id>` | use a specific konf in this shell |
| `set -` | go back to the konf set most recently |
| `namespace` / `ns` | pick a namespace of the current cluster |
| `ns <name>` | set the namespace of the current context |
| `delete` | pick a konf to delete from the store |
| `delete <id> [<id> ...]` | delete konfs; shell globs such as `"dev-eu*"` work |
| `cleanup` | remove active files whose shell has ended, and this shell's own |
| `version` | print version and build information as JSON |

Deleting a konf only removes it from the store; active files already in use
by other shells stay until those shells exit.

Commands that do not change `$KUBECONFIG` can also be run directly:

```sh
konf-go delete "dev-eu*"
konf-go cleanup
konf-go version
```

`konf-go` without a command prints its help. On failure it prints
`konf execution has failed: "<message>"` to standard error and exits with
status 1.

### The selection prompt

`set`, `delete` and `namespace` without arguments show a numbered list on
standard error. Type a number to choose that entry, type text to narrow the
list by fuzzy search (the characters must appear in order), or press Enter to
take the first entry shown. At most 15 entries are listed at once. End of
input or Ctrl-C aborts the prompt.

### Namespaces

`namespace` reads the kubeconfig that `$KUBECONFIG` points to and fails if the
variable is not set. To list namespaces it calls the API server of the current
context directly, using the cluster's `server`, `certificate-authority`(`-data`)
or `insecure-skip-tls-verify`, and the user's `token`, `tokenFile`,
`username`/`password` or `client-certificate`(`-data`)/`client-key`(`-data`).
Setting a namespace rewrites the first context of that file.

## Options

Every command accepts, before or after the command name:

- `--konf-dir <dir>`: where konfs are kept (default `$HOME/.kube/konfs`).
  The store lives in `<dir>/store`, the per-shell files in `<dir>/active`, and
  the id of the last konf set in `<dir>/latestkonf`.
- `--silent`: suppress informational and warning output.

## Layout of the konf directory

```
~/.kube/konfs/
├── active/        one file per shell, named <process id>.yaml
├── store/         one file per imported context, named <context>_<cluster>.yaml
└── latestkonf     id of the konf set most recently
```

Both directories are created on every run if missing. New files are created
with mode `0600` and directories with `0700`. Hidden files and subdirectories
in the store are ignored, and files that are not valid kubeconfigs are skipped
with a warning. A store file that holds more than one context or cluster is
reported as an error; re-import it to split it.

## Using it from Python

The pieces behind the commands can be used on their own, for example
`konf.kubeconfig.konfs_from_kubeconfig` to split a kubeconfig into
single-context `Konfig` objects, and `konf.store.StoreManager` to list, match
and write konfs in a store directory.

## What it does not do

- The namespace client does not run `exec` credential plugins or
  `auth-provider` entries of a kubeconfig; clusters that need them cannot be
  listed with `namespace` without arguments (`ns <name>` still works).
- The selection prompt is line based; it has no arrow-key navigation.
- Shell wrappers and completion scripts exist only for bash, zsh and fish.