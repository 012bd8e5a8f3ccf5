"""Bundle, sign, checksum and publish Maven artifacts to Sonatype Central."""

__version__ = "0.1.0"
