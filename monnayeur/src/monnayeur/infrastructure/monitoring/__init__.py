from monnayeur.infrastructure.monitoring.connection_status import ConnectionMonitor

__all__ = ["ConnectionMonitor"]
