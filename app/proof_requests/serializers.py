from rest_framework import serializers


class AttributeSerializer(serializers.Serializer):

    label = serializers.CharField(max_length=512)
    data = serializers.CharField(max_length=4096, required=False, allow_blank=True)
    name = serializers.CharField(max_length=512, required=False)


class ProofRequestDataSerializer(serializers.Serializer):

    name = serializers.CharField(max_length=512, required=False)
    version = serializers.CharField(max_length=56, required=False)
    requested_attributes = AttributeSerializer(many=True, required=False, default=list)
    requested_predicates = serializers.ListField(child=serializers.DictField(), required=False)


class ProofRequestPayloadSerializer(serializers.Serializer):

    data = ProofRequestDataSerializer(required=False)
    requester = serializers.DictField(required=False)
    original_proof_request_data = serializers.DictField(required=False)
    status_msg = serializers.CharField(max_length=512, required=False, allow_blank=True)

    def create(self, validated_data):
        return _merge(self.initial_data, validated_data)

    def update(self, instance, validated_data):
        instance.update(_merge(self.initial_data, validated_data))
        return instance


class NotificationPayloadInfoSerializer(serializers.Serializer):

    uid = serializers.CharField(max_length=512)
    sender_did = serializers.CharField(max_length=512, required=False)
    remote_pairwise_did = serializers.CharField(max_length=512, required=False)
    sender_name = serializers.CharField(max_length=512, required=False, allow_blank=True)
    sender_logo_url = serializers.URLField(required=False, allow_null=True)
    hide_modal = serializers.BooleanField(required=False)

    def create(self, validated_data):
        return _merge(self.initial_data, validated_data)

    def update(self, instance, validated_data):
        instance.update(_merge(self.initial_data, validated_data))
        return instance


def _plain(value):
    if isinstance(value, dict):
        return {k: _plain(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_plain(item) for item in value]
    return value


def _merge(original, validated):
    """Validated values over original input, undeclared keys are kept as is"""
    if isinstance(original, dict) and isinstance(validated, dict):
        result = _plain(original)
        for key, value in validated.items():
            result[key] = _merge(original.get(key), value)
        return result
    if isinstance(original, list) and isinstance(validated, list) and len(original) == len(validated):
        return [_merge(o, v) for o, v in zip(original, validated)]
    return _plain(validated)
