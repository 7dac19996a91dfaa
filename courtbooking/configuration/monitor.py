import logging
from decimal import Decimal
from opentelemetry import trace
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from azure.monitor.opentelemetry.exporter import AzureMonitorTraceExporter
from opentelemetry.sdk.resources import SERVICE_NAME, Resource
from courtbooking.configuration.config import Config

logger = logging.getLogger("courtbooking")
handler = logging.StreamHandler()
handler.setFormatter(logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s'))
logger.addHandler(handler)
logger.setLevel(logging.INFO)

resource = Resource(attributes={
    SERVICE_NAME: "courtbookingbackend"
})

def setup_tracing():
    """
    Tracer for the booking services. Spans are exported to Application
    Insights only when a connection string is configured; otherwise they
    stay in process and only the log lines are emitted.
    """
    try:
        trace_provider = TracerProvider(resource=resource)
        trace.set_tracer_provider(trace_provider)

        if Config.APPLICATIONINSIGHTS_CONNECTION_STRING:
            trace_provider.add_span_processor(BatchSpanProcessor(
                AzureMonitorTraceExporter(connection_string=Config.APPLICATIONINSIGHTS_CONNECTION_STRING)
            ))
            logger.info("Azure Monitor exporter attached")
        else:
            logger.info("Application Insights not configured, spans are not exported")
    except Exception as e:
        logger.error(f"Failed to set up tracing: {str(e)}")
    return trace.get_tracer("courtbooking")

tracer = setup_tracing()

def _attribute(value):
    # Span attributes only accept primitives; money and ids go through as text
    if isinstance(value, (bool, int, float)):
        return value
    return str(value)

def _set_properties(span, properties):
    for key, value in (properties or {}).items():
        span.set_attribute(key, _attribute(value))

def instrument_fastapi(app):
    try:
        FastAPIInstrumentor.instrument_app(app)
        logger.info("FastAPI app instrumented")
    except Exception as e:
        logger.error(f"Failed to instrument FastAPI app: {str(e)}")

def start_span(name, context=None, kind=None, attributes=None):
    """Start a span around a booking operation (availability, pricing, create...)."""
    return tracer.start_as_current_span(name, context=context, kind=kind, attributes=attributes)

def log_event(event_name, properties=None):
    try:
        with tracer.start_as_current_span(event_name) as span:
            _set_properties(span, properties)
        logger.info(f"Event: {event_name}", extra={"custom_properties": properties})
    except Exception as e:
        logger.error(f"Failed to log event '{event_name}': {str(e)}")

def log_exception(exception, properties=None):
    try:
        with tracer.start_as_current_span("exception") as span:
            span.record_exception(exception)
            _set_properties(span, properties)
            span.set_status(trace.StatusCode.ERROR, str(exception))
        logger.exception(f"Exception: {str(exception)}", exc_info=exception,
                         extra={"custom_properties": properties})
    except Exception as e:
        logger.error(f"Failed to log exception: {str(e)}")

def log_metric(metric_name, value, properties=None):
    """Record a numeric measurement. Decimal amounts are reported as floats."""
    if isinstance(value, Decimal):
        value = float(value)
    try:
        with tracer.start_as_current_span(f"metric:{metric_name}") as span:
            span.set_attribute("metric.value", value)
            _set_properties(span, properties)
        logger.info(f"Metric: {metric_name}={value}",
                    extra={"custom_properties": properties})
    except Exception as e:
        logger.error(f"Failed to log metric '{metric_name}': {str(e)}")
