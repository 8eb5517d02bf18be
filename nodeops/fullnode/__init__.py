"""Serialised status updates of full node resources."""