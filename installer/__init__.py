"""
Component installer framework.

This package provides the component base class, the registry the
components register themselves with, and the dispatcher that runs a
selection of them.
"""
