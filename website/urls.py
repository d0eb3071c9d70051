from django.urls import path
from . import views

urlpatterns = [
	path('', views.page_fragment, {'slug': 'home'}, name='home'),
	path('pages/<slug:slug>/', views.page_fragment, name='page_fragment'),
]
