import django_filters

from modules.customers.constants import CustomerType, DocumentType
from modules.customers.models import Customer


class CustomerFilter(django_filters.FilterSet):
    customer_type = django_filters.ChoiceFilter(choices=CustomerType.choices)
    document_type = django_filters.ChoiceFilter(choices=DocumentType.choices())
    names = django_filters.CharFilter(field_name="names", lookup_expr="icontains")
    email = django_filters.CharFilter(field_name="email", lookup_expr="iexact")
    active = django_filters.BooleanFilter(field_name="active")
    has_credit_card = django_filters.BooleanFilter(field_name="has_credit_card")

    class Meta:
        model = Customer
        fields = ["customer_type", "document_type", "names", "email", "active", "has_credit_card"]
