"""
Zoi distribution tooling.

Keeps the Zoi release artifacts (Cargo manifest, source constants, version status
file and Homebrew formula) in step with each other, and bootstraps the `zoi` binary
on machines that do not have it yet.
"""

__version__ = "0.1.0"
