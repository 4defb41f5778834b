"""
Shared building blocks for the messaging client.

Provides:
- Protocol enums (acknowledgement modes, compression codecs)
- Protocol size limits
- Partitioning strategies
- Error hierarchy and structured logging
"""
