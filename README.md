# ropm

`ropm` is a small package manager for source packages. It keeps its state
under `~/.ropm`. It downloads a package listing from a remote repository,
checks downloads against SHA-256 checksums, and builds packages with `make`.

## Requirements

The following programs must be on your `PATH`:

- `curl` downloads files from the repository.
- `make` builds, installs and uninstalls packages.
- `gpg` verifies the repository release. You need it only when you ask for
  key-based checks during setup.

Archives are decompressed and extracted by `ropm` itself. The `HOME`
environment variable must be set.

The repository address defaults to `https://ropm.example.com/`. Set the
`ROPM_REPO_URL` environment variable to use another one. The value is
prefixed directly to file names, so it should end with `/`.

## Installation

```
pip install .
```

This installs the `ropm` command. `python -m ropm.cli` runs the same entry
point.

## Usage

```
ropm [setup|install|xinstall|uninstall|update|xupdate|list] [options...]
```

If a command fails, `ropm` prints the error on standard error and exits with
status 1. An unknown command or a missing command also exits with status 1.

### Setting up the package listing

```
ropm setup
```

This command creates `~/.ropm` and `~/.ropm/bin` if they are missing. It then
downloads `Release` and `Release.asc` and asks whether to run key-based
checks. An answer of `y`, or no answer at all, turns the checks on. With the
checks on, setup does the following:

1. It imports `pubkey.asc` from the current directory with `gpg --import`.
2. It verifies `Release.asc` against `Release` with `gpg --verify`. If the
   verification fails, both files are deleted.
3. It downloads `Packages.gz` and prints the maintainer, version and checksum
   read from `Release`.
4. It checks the SHA-256 of `Packages.gz` against the checksum in `Release`.
   If they do not match, `Packages.gz` is deleted.

Without the checks, only `Packages.gz` is downloaded.

In both cases the listing is then unpacked to `~/.ropm/Packages`.

### Listing packages

```
ropm list
```

This prints a table of every package in `~/.ropm/Packages`, with the first
six characters of each SHA-256 checksum, followed by the total. Malformed
lines are reported on standard error and skipped.

### Installing a package

```
ropm install <package>
```

The package name must match an entry exactly. Entries whose names only
contain `<package>` are reported as similarly named and are not installed.
Installation then does the following:

1. It downloads `<package>.tar.gz` into `~/.ropm`.
2. It checks the archive's SHA-256 against the listing. If the check fails,
   the archive is deleted.
3. It decompresses the archive and extracts it into `~/.ropm`.
4. It runs `make` and `make install` in `~/.ropm/<package>`.
5. It removes `~/.ropm/<package>`.

```
ropm xinstall <package>
```

This does the same without the SHA-256 check. It asks for confirmation
first. An answer of `n`, or no answer, aborts.

### Uninstalling a package

```
ropm uninstall <package>
```

This requires an entry named exactly `<package>` in `~/.ropm/bin`. It then
runs `make -C ~/.ropm/bin/<package>.build uninstall`.

### Updating a package

```
ropm update <package>
ropm xupdate <package>
```

An update uninstalls the package and then installs it again. `xupdate` asks
for the same confirmation as `xinstall` and reinstalls without the SHA-256
check.

## What ropm does not do

`ropm` does not resolve dependencies between packages, and it keeps no
record of installed packages or their versions. What ends up in
`~/.ropm/bin`, including the `<package>.build` directory that `uninstall`
relies on, is entirely up to each package's own `make install` target.

## File formats

`~/.ropm/Packages` holds one package per line:

```
<package name> <SHA-256 checksum>
```

`~/.ropm/Release` holds three lines:

```
<maintainer name>
<major>.<minor>.<release>
<SHA-256 of Packages.gz>
```

## Using it from Python

- `ropm.release.parse_release(path)` reads a Release file into a `Release`
  with the fields `maintainer`, `version` (a tuple of three integers) and
  `sha256hash`.
- `ropm.listing.read_packages(path)` returns a list of `PackageEntry` objects
  with the fields `name` and `sha256`.
- `ropm.sha.file_sha256(path)` returns a file's hex digest.
- `ropm.sha.sha256_matches(expected, path)` compares a checksum with a
  file's digest.

Failures raise `ropm.repo.RopmError`.