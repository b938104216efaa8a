import json


def response_headers_function_js(default_headers: dict[str, dict[str, str]]) -> str:
    """CloudFront function adding default headers to every response.

    Headers already set by the origin take precedence over the defaults.
    """
    json_headers = json.dumps(default_headers, indent=4)
    return f"""function handler(event) {{
    var response = event.response;
    response.headers = Object.assign({{}}, {json_headers}, response.headers);
    return response;
}}"""


def request_function_js(fragments: list[str]) -> str:
    body = "".join(fragments)
    return f"""function handler(event) {{
    var request = event.request;{body}
    return request;
}}"""


def redirect_to_main_domain_js(main_domain: str) -> str:
    """Fragment answering with a 301 to the main domain when the Host differs.

    Path and query string are kept.
    """
    domain = json.dumps(main_domain)
    return f"""
    var host = request.headers.host ? request.headers.host.value : "";
    if (host !== {domain}) {{
        var query = [];
        for (var key in request.querystring) {{
            var param = request.querystring[key];
            var values = param.multiValue ? param.multiValue : [param];
            for (var i = 0; i < values.length; i++) {{
                query.push(values[i].value === "" ? key : key + "=" + values[i].value);
            }}
        }}
        var redirectUrl = "https://" + {domain} + request.uri;
        if (query.length > 0) {{
            redirectUrl += "?" + query.join("&");
        }}
        return {{
            statusCode: 301,
            statusDescription: "Moved Permanently",
            headers: {{
                location: {{ value: redirectUrl }}
            }}
        }};
    }}"""
