# umkatools

Helpers for testing a kernel's file system and driver code in user mode.

The package holds two kinds of things:

* a small library: virtual disks backed by raw or qcow2 image files, an
  I/O helper the disks share, a framebuffer converter to 32-bit RGB, and a
  writer for `devices.dat` IRQ tables;
* command-line tools that build test data on a host file system and
  annotate assembler listings with coverage counters.

It has no dependencies beyond the standard library.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Command-line tools

Every tool prints a usage line to standard error and exits with status 1
when its arguments are wrong.

### covpreproc

```
covpreproc <listing file> <coverage files ...>
```

Adds up the branch counters of one or more binary coverage files (pairs of
little-endian 64-bit "to" and "from" counts, one pair per byte address)
and prints the listing with, for every instruction line, how many times it
was reached and, for conditional jumps and loops, how many times the
branch was taken and not taken. Lines never reached, and jumps that only
ever went one way, are marked with `-`.

### gensamehash

```
gensamehash <hash> <hash_cnt> <start_num>
```

Walks ten-character names (counting in `0-9`, `A-Z`, `a-z`) from the
zero-padded `start_num` and appends every name whose XFS directory hash
equals `hash` (hexadecimal) to a file named `hash_0x<hash>.<pid>`,
numbering matches from `hash_cnt`. It runs until interrupted; on systems
with `SIGUSR1`, that signal makes it print the name it has reached.

### mkdirrange

```
mkdirrange <directory> <num_begin> <num_end> <pat_min> <pat_max>
```

Creates a directory `d<number>_xxx...` for every number from `num_begin`
up to, but not including, `num_end`; the number is ten digits wide and the
run of `x` is `pat_min + number % pat_max` long. Keep
`pat_min + pat_max` at 244 or less so the names fit a file system's limit.

### mkdoubledirs

```
mkdoubledirs <directory> <prefix> <count>
```

Creates `count` directories `<prefix><number>`, each holding a directory
of the same name, which is useful for testing search.

### mkfilepattern

```
mkfilepattern <filename> <offset> <length>
```

Writes `length` bytes at `offset` into a file (creating it if needed and
leaving other bytes alone). Each position holds its own offset,
little-endian, 1, 2, 4 or 8 bytes wide as the value needs; the pattern
restarts every 16 bytes. Offset and length accept decimal, `0x`
hexadecimal and `0` octal.

### randdir

```
randdir <directory> <random_things_count> <name_max> <path_max> <file_size_max>
```

Fills a directory with a tree of randomly named folders and files. The
same arguments always give the same tree. `file_size_max` must be at
least 13, the size of the `<FILE>` and `</FILE>` markers that frame every
generated file.

### mksamehash

```
mksamehash <directory> <count> [-q]
```

Creates `count` directories `d_<segment>_<segment>...` built from
twelve-digit segments that all share one XFS directory hash; as many
segments are used as needed to give `count` distinct names. A trailing
`-q` is accepted and has no effect.

## Library

```python
from umkatools.filepattern import pattern_bytes
from umkatools.randdir import uint_hash
from umkatools.samehash import xfs_da_hashname, increment
from umkatools.samehash_names import same_hash_names
from umkatools.mksamehash import dir_names

data = pattern_bytes(0, 0x20)
seed = uint_hash(7)
h = xfs_da_hashname("0000000000")
names = list(dir_names(3))
```

### Virtual disks

`umkatools.vdisk.open_vdisk(fname, adjust_cache_size=False, cache_size=0,
io=None)` picks the format from the file suffix (`.raw` or `.qcow2`) and
raises `UnknownDiskFormat` for anything else. An image whose name contains
`s4096` or `s4k` uses 4096-byte sectors, any other 512-byte ones
(`umkatools.base.sector_size_for`).

Every disk is a `umkatools.base.VirtualDisk` and a context manager. It
offers `read(start_sector, count)`, `write(data, start_sector)`,
`query_media()` (a `MediaInfo` with flags, sector size and capacity),
`adjust_cache_size(suggested_size)` and `close()`.

* `umkatools.raw.RawDisk.open(fname, io=None)` opens the file read-only;
  its size decides the sector count.
* `umkatools.qcow2.Qcow2Disk.open(fname, io=None)` reads version 3
  images, unencrypted and without incompatible features. Unallocated and
  zeroed clusters read as zeros, compressed clusters are inflated, and
  `write` raises `io.UnsupportedOperation`. A bad header, a truncated
  table or a cluster that will not inflate raises `Qcow2Error`.
  `Qcow2Header.parse(data)` decodes and checks a header on its own.

`umkatools.io.UmkaIo` reads and writes file descriptors directly while its
`running` state is below `Running.YES`; from then on reads go through a
single worker thread and writes raise `io.UnsupportedOperation`.

### Display and devices

`umkatools.display.to_rgb888(data, width, height, bpp, pitch)` converts a
16, 24 or 32 bits per pixel framebuffer to 32-bit RGB and raises
`ValueError` for other depths or a short buffer.

`umkatools.devices_dat.write_devices_dat(path, entries)` writes the
`DevicesDatEntry` records that have a nonzero IRQ as 16-byte records,
closed by the `0xffffffff` terminator, and returns how many it wrote.
`DevicesDatEntry.pack()` and `DevicesDatEntry.unpack(data)` convert one
record.

## What the package does not do

It does not contain a kernel: nothing here boots a system, runs a command
shell, mounts an image as a host file system, emulates network devices or
collects coverage counters. The disks, the framebuffer converter and the
`devices.dat` writer work on data handed to them, and `covpreproc` only
reads coverage files produced elsewhere.