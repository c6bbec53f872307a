"""
Metaverse University chain fixture package.

Layered the same way throughout:

  campus/repositories/  in-memory collections of fixture records.
  campus/services/      business logic: required-field checks, filtering,
                          record synthesis, statistics.

:class:`~campus.store.FixtureStore` owns one repository per collection and is
injected into the services; ``chain_api.create_app`` builds a store, wires the
services, and exposes them over HTTP.  Tests construct their own isolated
store per case instead of sharing process-wide globals.
"""

__version__ = '1.0.0'
