import time
from opentelemetry import trace
from poelink_obs import Config, create_logger, init, safe_stringify, shutdown

def main():
    init(Config(service_name="PoeLink", environment="dev"))
    log = create_logger("demo", serialize_options={"maxArrayLength": 3})

    payload = {"user": "alice", "scores": list(range(10)), "started": time.time()}
    payload["self"] = payload

    tracer = trace.get_tracer("poelink.demo")
    with tracer.start_as_current_span("demo.span"):
        log.debug("payload received", payload)
        log.info("no data attached")
        try:
            raise ValueError("bad input")
        except ValueError as e:
            e.code = 400
            log.error("request failed", e, "extra-arg")

    print(safe_stringify(payload, {"maxArrayLength": 3}))
    shutdown()

if __name__ == "__main__":
    main()
