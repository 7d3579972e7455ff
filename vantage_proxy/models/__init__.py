from .proxy import ProxyConfig, ProxyRequest, ProxyResult, ErrorBody, TargetUrlParseResult
