"""Substrate bridge events, deposit/retry listeners and proposal building."""