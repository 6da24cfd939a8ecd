"""
ssrs_admin

This package provides administrative commands for a SQL Server
Reporting Services (SSRS) report server, reached through its
SOAP web service (ReportService2010).
"""
__version__ = "0.1.0"
