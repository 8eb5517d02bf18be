"""Health-check WSGI applications and a client for the disk usage check."""