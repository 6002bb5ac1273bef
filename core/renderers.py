"""
Core — Response Renderer

Wraps all successful responses in the standard envelope:
  { "success": true, "data": ..., "meta": ... }

Views may expose an ``envelope_meta`` dict (for instance the hierarchy
version a resolver answer was computed from); it is merged into meta.

@file core/renderers.py
"""

from rest_framework.renderers import JSONRenderer


class StandardJSONRenderer(JSONRenderer):
    """Wraps successful API responses in a consistent envelope."""

    def render(self, data, accepted_media_type=None, renderer_context=None):
        renderer_context = renderer_context or {}
        response = renderer_context.get('response')

        if response is not None and response.status_code >= 400:
            return super().render(data, accepted_media_type, renderer_context)

        if isinstance(data, dict) and 'success' in data:
            return super().render(data, accepted_media_type, renderer_context)

        meta = {}
        if isinstance(data, dict) and 'results' in data:
            meta = {
                'count': data.get('count'),
                'next': data.get('next'),
                'previous': data.get('previous'),
            }
            data = data['results']

        view = renderer_context.get('view')
        meta.update(getattr(view, 'envelope_meta', None) or {})

        envelope = {'success': True, 'data': data}
        if meta:
            envelope['meta'] = meta
        return super().render(envelope, accepted_media_type, renderer_context)
