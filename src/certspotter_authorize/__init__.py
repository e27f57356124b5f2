"""
certspotter_authorize — pre-authorize certificates for the Cert Spotter monitor.

Computes the SHA-256 of a certificate's TBSCertificate and creates the
".notified" marker the monitor checks before notifying, so a certificate you
already know about (or its precertificate) raises no alert.

Built on the Railway-Oriented Programming (ROP) framework for
explicit, composable, functional error handling.
"""

__version__ = "0.1.0"
__source__ = "certspotter_authorize"
