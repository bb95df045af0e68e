"""Output sinks."""

from atomfeed.infra.sinks.atom_xml import AtomXMLOutputSink

__all__ = ["AtomXMLOutputSink"]
