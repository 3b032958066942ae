"""
swift_protogen - Swift source generation from protocol buffer descriptors.
"""

__version__ = "0.1.0"
