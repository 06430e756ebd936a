"""Per-shell kubeconfig management: import, switch, change namespace and clean up kubeconfigs."""

__version__ = "0.1.0"