import os
import psutil
import threading
from typing import Optional
from .logger import logger

_monitor_thread: Optional[threading.Thread] = None
_stop_monitor = threading.Event()

def log_system_resources():
    """Logs memory, CPU, thread and open connection usage of the API process."""
    try:
        process = psutil.Process(os.getpid())

        rss_mb = process.memory_info().rss / (1024 * 1024)
        cpu_percent = process.cpu_percent(interval=0.1)
        logger.info(f"Resources - RSS: {rss_mb:.2f} MB, CPU: {cpu_percent:.2f}%, Threads: {process.num_threads()}")

        try:
            logger.info(f"Resources - Open files: {len(process.open_files())}")
        except (psutil.AccessDenied, NotImplementedError) as e:
            logger.debug(f"Open file count unavailable: {type(e).__name__}")

        try:
            # Pooled database connections show up here
            logger.info(f"Resources - inet connections: {len(process.net_connections(kind='inet'))}")
        except (psutil.AccessDenied, NotImplementedError, AttributeError) as e:
            logger.debug(f"Connection count unavailable: {type(e).__name__}")

    except psutil.NoSuchProcess:
        logger.warning("Process information unavailable for resource logging.")
    except Exception as e:
        logger.error(f"Error while logging system resources: {e}", exc_info=True)

def _monitor_task(interval_seconds: int):
    logger.info(f"Resource monitor started (interval: {interval_seconds}s)")
    while not _stop_monitor.is_set():
        log_system_resources()
        _stop_monitor.wait(timeout=interval_seconds)
    logger.info("Resource monitor stopped.")

def start_resource_monitor(interval_seconds: int = 300) -> bool:
    """
    Starts the background resource logging thread.

    Returns False when monitoring is disabled (interval <= 0) or already running.
    """
    global _monitor_thread
    if interval_seconds <= 0:
        logger.debug("Resource monitor disabled by configuration.")
        return False
    if _monitor_thread is not None and _monitor_thread.is_alive():
        logger.debug("Resource monitor already running.")
        return False
    _stop_monitor.clear()
    _monitor_thread = threading.Thread(target=_monitor_task, args=(interval_seconds,), daemon=True, name="resource-monitor")
    _monitor_thread.start()
    return True

def stop_resource_monitor():
    """Signals the monitor thread to stop and waits briefly for it."""
    global _monitor_thread
    if _monitor_thread and _monitor_thread.is_alive():
        _stop_monitor.set()
        _monitor_thread.join(timeout=5)
        if _monitor_thread.is_alive():
            logger.warning("Resource monitor thread did not stop in time.")
    _monitor_thread = None
