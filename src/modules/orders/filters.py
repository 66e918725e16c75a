import django_filters
from django.utils import timezone

from modules.orders.constants import OrderStatus, PaymentMethod, PaymentStatus
from modules.orders.models import Order


class OrderFilter(django_filters.FilterSet):
    status = django_filters.ChoiceFilter(choices=OrderStatus.choices)
    payment_method = django_filters.ChoiceFilter(choices=PaymentMethod.choices)
    payment_status = django_filters.ChoiceFilter(choices=PaymentStatus.choices)
    customer_phone = django_filters.CharFilter(field_name="customer_phone")
    start_date = django_filters.DateFilter(
        field_name="created_at", lookup_expr="date__gte"
    )
    end_date = django_filters.DateFilter(
        field_name="created_at", lookup_expr="date__lte"
    )
    today = django_filters.BooleanFilter(method="filter_today")

    class Meta:
        model = Order
        fields = [
            "status",
            "payment_method",
            "payment_status",
            "customer_phone",
            "start_date",
            "end_date",
            "today",
        ]

    def filter_today(self, queryset, name, value):
        if not value:
            return queryset
        return queryset.filter(created_at__date=timezone.localdate())
