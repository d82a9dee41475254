import json
import logging

from app.obs import logging as obs_logging


def _record(**extra) -> logging.LogRecord:
	record = logging.LogRecord("discovery.test", logging.INFO, __file__, 1, "search_completed", (), None)
	for key, value in extra.items():
		setattr(record, key, value)
	return record


def test_formatter_includes_bound_context_and_extra_fields():
	token = obs_logging.bind_context(request_id="req-1", route="/search")
	try:
		payload = json.loads(obs_logging.JSONLogFormatter().format(_record(results=3, latency_ms=1.5)))
	finally:
		obs_logging.reset_context(token)

	assert payload["msg"] == "search_completed"
	assert payload["request_id"] == "req-1"
	assert payload["route"] == "/search"
	assert payload["results"] == 3
	assert payload["latency_ms"] == 1.5
	assert obs_logging.current_request_id() is None


def test_location_fields_are_redacted():
	payload = json.loads(
		obs_logging.JSONLogFormatter().format(
			_record(lat=46.5, lon=6.6, mean_location="46.5,6.6", candidate={"user_id": "u1", "geo_point": (1, 2)})
		)
	)
	assert payload["lat"] == "[redacted]"
	assert payload["lon"] == "[redacted]"
	assert payload["mean_location"] == "[redacted]"
	assert payload["candidate"] == {"user_id": "u1", "geo_point": "[redacted]"}


def test_info_sampling_keeps_warnings():
	drop_all = obs_logging.InfoSamplingFilter(0.0)
	assert drop_all.filter(_record()) is False
	warning = logging.LogRecord("discovery.test", logging.WARNING, __file__, 1, "slow", (), None)
	assert drop_all.filter(warning) is True
	assert obs_logging.InfoSamplingFilter(1.0).filter(_record()) is True
