"""
Interface package: text protocol for driving the Tablut engine.

Modules:
    protocol — Line-oriented command protocol handler.
               Reads commands from stdin, writes responses to stdout.
               Can be run as a module: python -m interface.protocol
"""
