# ABOUTME: HTTP gateway exposing OpenWeatherMap current, five-day and grouped forecasts.
# ABOUTME: See forecast_gateway.web for the ASGI app factory.
