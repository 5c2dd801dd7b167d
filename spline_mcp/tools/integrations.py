"""API connection, webhook and OpenAI tools."""

from __future__ import annotations

from typing import Any

from .base import (
    SCENE_ID,
    VARIABLE_TYPES,
    ToolContext,
    array,
    boolean,
    compact,
    delete_tool,
    endpoint,
    enum,
    fetch_tool,
    ident,
    integer,
    number,
    obj,
    pick,
    record,
    result_field,
    string,
    tool,
)

HTTP_METHODS = ('GET', 'POST', 'PUT', 'DELETE', 'HEAD', 'OPTIONS', 'PATCH')
OPENAI_MODELS = ('gpt-3.5-turbo', 'gpt-4-turbo', 'gpt-4o-mini', 'gpt-4o')


def _mapping(source_field: str, source_description: str, typed: bool = True) -> dict[str, Any]:
    properties = {
        source_field: string(source_description),
        'variableName': string('Spline variable name'),
    }
    required = [source_field, 'variableName']
    if typed:
        properties['variableType'] = enum(VARIABLE_TYPES, 'Variable type')
        required.append('variableType')
    return obj(properties, required)


# =============================================================================
# API connections
# =============================================================================

@tool(
    'configureApi',
    "Configure an external API request the scene can call and map into variables.",
    {
        'sceneId': SCENE_ID,
        'name': ident('API name'),
        'method': enum(HTTP_METHODS, 'HTTP method'),
        'url': string('API endpoint URL', format='uri'),
        'headers': {'type': 'object', 'additionalProperties': {'type': 'string'}, 'description': 'HTTP headers'},
        'body': record('Request body (for POST, PUT, PATCH)'),
        'queryParams': {
            'type': 'object', 'additionalProperties': {'type': 'string'}, 'description': 'URL query parameters',
        },
        'requestOnStart': boolean('Whether to call the API when the scene loads', default=False),
        'variableMappings': array(
            _mapping('responseField', 'Field from API response'),
            'Mappings from API response to Spline variables',
        ),
    },
    ['sceneId', 'name', 'method', 'url'],
    'configuring API',
)
async def configure_api(ctx: ToolContext, arguments: dict[str, Any]) -> str:
    data = {
        'name': arguments['name'],
        'method': arguments['method'],
        'url': arguments['url'],
        **pick(arguments, 'headers', 'body', 'queryParams'),
        'requestOnStart': bool(arguments.get('requestOnStart', False)),
        **pick(arguments, 'variableMappings'),
    }
    result = await ctx.api.configure_api(arguments['sceneId'], data)
    return f"API connection configured successfully with ID: {result_field(result, 'id')}"


get_apis = fetch_tool(
    'getApis',
    "List the API connections configured for a scene.",
    '/scenes/{sceneId}/apis',
    'retrieving APIs',
)

delete_api = delete_tool(
    'deleteApi',
    "Delete an API connection.",
    '/scenes/{sceneId}/apis/{apiId}',
    'deleting API connection',
    {'sceneId': SCENE_ID, 'apiId': ident('API connection ID')},
    'API connection {apiId} deleted successfully',
)


# =============================================================================
# Webhooks
# =============================================================================

@tool(
    'createWebhook',
    "Create a webhook that external services can call to set scene variables.",
    {
        'sceneId': SCENE_ID,
        'name': ident('Webhook name'),
        'parameterMappings': array(
            _mapping('paramName', 'Parameter name in webhook'),
            'Parameter mappings',
        ),
    },
    ['sceneId', 'name'],
    'creating webhook',
)
async def create_webhook(ctx: ToolContext, arguments: dict[str, Any]) -> str:
    data = {'name': arguments['name'], **pick(arguments, 'parameterMappings')}
    result = await ctx.api.create_webhook(arguments['sceneId'], data)
    return (
        f"Webhook created successfully with ID: {result_field(result, 'id')} "
        f"and URL: {result_field(result, 'url')}"
    )


get_webhooks = fetch_tool(
    'getWebhooks',
    "List the webhooks configured for a scene.",
    '/scenes/{sceneId}/webhooks',
    'retrieving webhooks',
)

delete_webhook = delete_tool(
    'deleteWebhook',
    "Delete a webhook.",
    '/scenes/{sceneId}/webhooks/{webhookId}',
    'deleting webhook',
    {'sceneId': SCENE_ID, 'webhookId': ident('Webhook ID')},
    'Webhook {webhookId} deleted successfully',
)


@tool(
    'triggerWebhook',
    "Call a webhook with test data.",
    {
        'sceneId': SCENE_ID,
        'webhookId': ident('Webhook ID'),
        'data': record('Data to send to the webhook'),
    },
    ['sceneId', 'webhookId', 'data'],
    'triggering webhook',
)
async def trigger_webhook(ctx: ToolContext, arguments: dict[str, Any]) -> str:
    webhook_id = arguments['webhookId']
    await ctx.api.trigger_webhook(arguments['sceneId'], webhook_id, arguments['data'])
    return f"Webhook {webhook_id} triggered successfully"


# =============================================================================
# OpenAI
# =============================================================================

@tool(
    'configureOpenAI',
    "Configure the scene's OpenAI integration. Uses OPENAI_API_KEY when no key is given.",
    {
        'sceneId': SCENE_ID,
        'model': enum(OPENAI_MODELS, 'OpenAI model to use', default='gpt-3.5-turbo'),
        'apiKey': string('OpenAI API key (uses env var if not provided)'),
        'prompt': ident('System prompt/behavior for the AI'),
        'requestOnStart': boolean('Whether to call OpenAI when the scene loads', default=False),
        'variableMappings': array(
            _mapping('responseField', 'Field from API response', typed=False),
            'Mappings from OpenAI response to Spline variables',
        ),
    },
    ['sceneId', 'prompt'],
    'configuring OpenAI',
)
async def configure_openai(ctx: ToolContext, arguments: dict[str, Any]) -> str:
    data = compact(
        model=arguments.get('model', 'gpt-3.5-turbo'),
        apiKey=arguments.get('apiKey') or ctx.openai.config.api_key,
        prompt=arguments['prompt'],
        requestOnStart=bool(arguments.get('requestOnStart', False)),
        variableMappings=arguments.get('variableMappings'),
    )
    result = await ctx.api.request('POST', endpoint("/scenes/{}/openai", arguments['sceneId']), data)
    return f"OpenAI integration configured successfully with ID: {result_field(result, 'id')}"


@tool(
    'generateTextWithOpenAI',
    "Generate text directly with OpenAI (not through Spline).",
    {
        'prompt': ident('Prompt for text generation'),
        'model': enum(OPENAI_MODELS, 'OpenAI model to use', default='gpt-3.5-turbo'),
        'maxTokens': integer('Maximum number of tokens to generate', minimum=1, maximum=4096, default=256),
        'temperature': number('Temperature for text generation (0-2)', minimum=0, maximum=2, default=0.7),
    },
    ['prompt'],
    'generating text',
)
async def generate_text_with_openai(ctx: ToolContext, arguments: dict[str, Any]) -> str:
    return await ctx.openai.generate_text(
        arguments['prompt'],
        model=arguments.get('model', 'gpt-3.5-turbo'),
        max_tokens=arguments.get('maxTokens', 256),
        temperature=arguments.get('temperature', 0.7),
    )


TOOLS = [
    configure_api,
    get_apis,
    delete_api,
    create_webhook,
    get_webhooks,
    delete_webhook,
    trigger_webhook,
    configure_openai,
    generate_text_with_openai,
]
