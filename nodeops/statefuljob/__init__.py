"""Jobs that run against volumes restored from snapshots."""