"""Raw and qcow2 virtual disks, display and devices.dat helpers, coverage
annotation and file-system test data generators."""

__version__ = "0.1.0"