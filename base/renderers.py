from rest_framework.renderers import JSONRenderer


class EnvelopeJSONRenderer(JSONRenderer):
    """
    Wrap successful payloads as ``{"data": ...}``.

    Error payloads produced by ``base.exceptions.quest_exception_handler``
    are already shaped as ``{"error": ...}`` and pass through untouched.
    A null payload renders as ``{"data": null}`` except on 204 responses.
    """

    def render(self, data, accepted_media_type=None, renderer_context=None):
        renderer_context = renderer_context or {}
        response = renderer_context.get("response")

        if data is None and (response is None or response.status_code == 204):
            return super().render(data, accepted_media_type, renderer_context)

        if response is not None and (
            getattr(response, "exception", False) or response.status_code >= 400
        ):
            return super().render(data, accepted_media_type, renderer_context)

        return super().render({"data": data}, accepted_media_type, renderer_context)
