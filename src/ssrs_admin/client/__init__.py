"""
Client-side components for talking to the report server.
This package provides the narrow `ReportingService` interface the commands
depend on, and its zeep-backed SOAP implementation.
"""
