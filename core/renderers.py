"""
Core — Response Renderer

Wraps all successful JSON responses in the standard envelope:
  { "success": true, "data": ..., "meta": ... }

Bodies that already carry ``success`` (views building their own
envelope) pass through, and empty bodies (204) stay empty.

@file core/renderers.py
"""

from rest_framework.renderers import JSONRenderer

META_KEYS = ('count', 'page', 'page_size', 'next', 'previous')


class StandardJSONRenderer(JSONRenderer):

    def render(self, data, accepted_media_type=None, renderer_context=None):
        response = renderer_context.get('response') if renderer_context else None

        if data is None or (response is not None and response.status_code >= 400):
            return super().render(data, accepted_media_type, renderer_context)

        if isinstance(data, dict) and 'success' in data:
            return super().render(data, accepted_media_type, renderer_context)

        if isinstance(data, dict) and 'results' in data:
            envelope = {
                'success': True,
                'data': data['results'],
                'meta': {key: data[key] for key in META_KEYS if key in data},
            }
        else:
            envelope = {'success': True, 'data': data}

        return super().render(envelope, accepted_media_type, renderer_context)
